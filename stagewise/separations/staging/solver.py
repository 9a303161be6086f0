"""Curve/line intersection by bounded bisection"""

from dataclasses import dataclass
from typing import Callable, Union

from stagewise.core.numerical import bisection
from stagewise.core.validation import NoIntersectionError, check_positive
from stagewise.separations.equilibrium import EquilibriumCurve
from .operating_line import AnyOperatingLine

Target = Union[float, AnyOperatingLine]


@dataclass(frozen=True)
class IntersectionSolver:
    """
    Finds x in [start_bound, end_bound] with curve(x) == target(x).

    Bisection rather than Newton: equilibrium relations may be user
    expressions that are not differentiable. With ``strict`` unset an
    exhausted iteration budget returns the last midpoint.
    """
    tol: float = 1e-6
    maxiter: int = 60
    strict: bool = False

    def __post_init__(self):
        check_positive("tol", self.tol)
        check_positive("maxiter", self.maxiter)

    def find_intersection(
        self,
        start_bound: float,
        end_bound: float,
        target: Target,
        curve: EquilibriumCurve,
    ) -> float:
        residual = _residual(target, curve)
        try:
            return bisection(
                residual, start_bound, end_bound,
                tol=self.tol, maxiter=self.maxiter, strict=self.strict,
            )
        except NoIntersectionError as exc:
            raise NoIntersectionError(
                f"No intersection with equilibrium curve {curve.describe()!r} "
                f"in [{start_bound:.6g}, {end_bound:.6g}]: {exc}",
                best_estimate=exc.best_estimate,
            )


def _residual(target: Target, curve: EquilibriumCurve) -> Callable[[float], float]:
    if hasattr(target, "value_at"):
        return lambda x: curve.evaluate(x) - target.value_at(x)
    value = float(target)
    return lambda x: curve.evaluate(x) - value


def find_intersection(
    start_bound: float,
    end_bound: float,
    target: Target,
    curve: EquilibriumCurve,
    tol: float = 1e-6,
    maxiter: int = 60,
) -> float:
    """Convenience wrapper using a default solver"""
    return IntersectionSolver(tol, maxiter).find_intersection(start_bound, end_bound, target, curve)
