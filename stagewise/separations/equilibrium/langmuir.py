"""Langmuir-type equilibrium: y = a x / (1 + b x)"""

from stagewise.core.validation import check_finite, check_positive, check_non_negative
from .base import EquilibriumCurve


class LangmuirEquilibrium(EquilibriumCurve):
    """Saturating relation, concave for b > 0"""

    def __init__(self, a: float, b: float):
        self.a = check_positive("a", a)
        self.b = check_non_negative("b", b)

    def y_of_x(self, x: float) -> float:
        x = check_finite("x", x)
        return self.a * x / (1.0 + self.b * x)

    def x_of_y(self, y: float) -> float:
        y = check_finite("y", y)
        # y (1 + b x) = a x  ->  x = y / (a - b y)
        return y / (self.a - self.b * y)

    def describe(self) -> str:
        return f"{self.a:g}*x/(1 + {self.b:g}*x)"


__all__ = ['LangmuirEquilibrium']
