# stagewise/separations/equilibrium/linear_slope.py
"""Straight-line equilibrium: y = m x + b"""

from stagewise.core.validation import check_finite, check_positive, check_non_negative
from .base import EquilibriumCurve


class LinearEquilibrium(EquilibriumCurve):
    """
    Henry's-law style relation for dilute systems, optionally offset.

    Not clipped to [0, 1]: solute-free mole ratios may exceed one.
    """

    def __init__(self, m: float, b: float = 0.0):
        self.m = check_positive("m", m)
        self.b = check_non_negative("b", b)

    def y_of_x(self, x: float) -> float:
        return self.b + self.m * check_finite("x", x)

    def x_of_y(self, y: float) -> float:
        return (check_finite("y", y) - self.b) / self.m

    def describe(self) -> str:
        return f"{self.m:g}*x + {self.b:g}"


__all__ = ['LinearEquilibrium']
