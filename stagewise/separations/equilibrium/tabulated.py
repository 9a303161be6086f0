"""Equilibrium curve from measured (x, y) pairs"""

from typing import Sequence

import numpy as np

from stagewise.core.validation import ConfigurationError
from stagewise.core.numerical import linear_interpolate
from .base import EquilibriumCurve


class TabulatedEquilibrium(EquilibriumCurve):
    """
    Piecewise-linear curve through the table. Points may be given in any
    order; they are sorted on x. Without ``extrapolate`` the curve's domain
    is the tabulated x range.
    """

    def __init__(self, x_points: Sequence[float], y_points: Sequence[float], extrapolate: bool = False):
        try:
            xs = np.asarray(x_points, dtype=float)
            ys = np.asarray(y_points, dtype=float)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Equilibrium table must hold numbers: {exc}")
        if xs.shape != ys.shape or xs.ndim != 1:
            raise ConfigurationError(f"Table columns differ in shape: {xs.shape} vs {ys.shape}")
        if xs.size < 2:
            raise ConfigurationError("Equilibrium table needs at least 2 points")
        if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
            raise ConfigurationError("Equilibrium table contains non-finite values")

        order = np.argsort(xs, kind="stable")
        self.x_points, self.y_points = xs[order], ys[order]
        self.extrapolate = extrapolate
        if not extrapolate:
            self.domain = (float(self.x_points[0]), float(self.x_points[-1]))

    def y_of_x(self, x: float) -> float:
        return linear_interpolate(x, self.x_points, self.y_points, self.extrapolate)

    def x_of_y(self, y: float) -> float:
        order = np.argsort(self.y_points, kind="stable")
        return linear_interpolate(y, self.y_points[order], self.x_points[order], self.extrapolate)

    def describe(self) -> str:
        return f"table[{self.x_points.size} points]"


__all__ = ['TabulatedEquilibrium']
