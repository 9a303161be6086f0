# stagewise/separations/equilibrium/constant_alpha.py
"""Binary vapour-liquid equilibrium at constant relative volatility"""
from stagewise.core.validation import check_in_closed_01, check_positive
from .base import EquilibriumCurve


class BinaryConstantAlpha(EquilibriumCurve):
    """
    y = alpha x / (1 + (alpha - 1) x)

    Inverse in closed form: x = y / (alpha - (alpha - 1) y).
    """

    domain = (0.0, 1.0)

    def __init__(self, alpha: float):
        self.alpha = check_positive("alpha", alpha)

    def y_of_x(self, x: float) -> float:
        x = check_in_closed_01("x", x)
        return self.alpha * x / (1.0 + (self.alpha - 1.0) * x)

    def x_of_y(self, y: float) -> float:
        y = check_in_closed_01("y", y)
        return min(1.0, y / (self.alpha - (self.alpha - 1.0) * y))

    def describe(self) -> str:
        return f"alpha={self.alpha:g}"


__all__ = ['BinaryConstantAlpha']
