# stagewise/core/numerical.py
"""Root finding and interpolation shared by the stage builders"""
from typing import Callable, Sequence

import numpy as np
from loguru import logger

from .validation import ConfigurationError, NoIntersectionError, check_positive


def bisection(
    f: Callable[[float], float],
    a: float,
    b: float,
    args: tuple = (),
    tol: float = 1e-6,
    maxiter: int = 60,
    strict: bool = False,
) -> float:
    """
    Bounded bisection for a root of f in [a, b].

    The bracket may be given in either order. Converged when |f(x)| <= tol.
    When the iteration budget runs out the last midpoint is returned, or
    NoIntersectionError is raised if strict is set.
    """
    check_positive("tol", tol)
    check_positive("maxiter", maxiter)

    def g(x: float) -> float:
        return f(x, *args)

    g_a = g(a)
    if abs(g_a) <= tol:
        return a
    g_b = g(b)
    if abs(g_b) <= tol:
        return b
    if (g_a > 0) == (g_b > 0):
        raise NoIntersectionError(f"No sign change in [{a}, {b}]")

    # keep the residual negative at `neg` and positive at `pos`
    neg, pos = (a, b) if g_a < 0 else (b, a)
    x = 0.5 * (neg + pos)
    for _ in range(int(maxiter)):
        x = 0.5 * (neg + pos)
        r = g(x)
        if abs(r) <= tol:
            return x
        if r < 0:
            neg = x
        else:
            pos = x

    if strict:
        raise NoIntersectionError(
            f"Bisection did not converge within {maxiter} iterations", best_estimate=x
        )
    logger.debug("Bisection budget exhausted in [{}, {}], accepting x={}", a, b, x)
    return x


def linear_interpolate(
    x: float,
    x_points: Sequence[float],
    y_points: Sequence[float],
    extrapolate: bool = False,
) -> float:
    """
    Piecewise linear interpolation on ascending x_points.

    Outside the table the end values are held, or the end segments are
    extended when extrapolate is set.
    """
    xp = np.asarray(x_points, dtype=float)
    yp = np.asarray(y_points, dtype=float)
    if xp.shape != yp.shape or xp.ndim != 1:
        raise ConfigurationError("x_points and y_points must be 1-D and the same length")
    if xp.size < 2:
        raise ConfigurationError("At least 2 points required")
    if np.any(np.diff(xp) < 0):
        raise ConfigurationError("x_points must be sorted")

    if extrapolate and (x < xp[0] or x > xp[-1]):
        i = 0 if x < xp[0] else -2
        dx = xp[i + 1] - xp[i]
        slope = (yp[i + 1] - yp[i]) / dx if dx > 0 else 0.0
        return float(yp[i] + slope * (x - xp[i]))
    return float(np.interp(x, xp, yp))


def fraction_of_step(start: float, end: float, target: float) -> float:
    """Fraction of the step start -> end needed to reach target, clipped to [0, 1]"""
    if abs(end - start) < 1e-14:
        return 1.0
    frac = (target - start) / (end - start)
    return max(0.0, min(1.0, frac))


__all__ = ['bisection', 'linear_interpolate', 'fraction_of_step']
