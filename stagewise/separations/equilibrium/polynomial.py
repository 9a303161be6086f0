"""Polynomial equilibrium relations, e.g. y = 2 x^2"""

from typing import Sequence

import numpy as np
from numpy.polynomial import Polynomial

from stagewise.core.validation import ConfigurationError, check_finite
from .base import EquilibriumCurve


class PolynomialEquilibrium(EquilibriumCurve):
    """
    y = c0 + c1 x + c2 x^2 + ...

    Coefficients are given in increasing order of power, so ``(0, 0, 3.6)``
    is the crosscurrent default y = 3.6 x^2.
    """

    def __init__(self, coefficients: Sequence[float]):
        try:
            items = list(coefficients)
        except TypeError:
            raise ConfigurationError(f"coefficients must be a sequence, got {coefficients!r}")
        coeffs = [check_finite(f"c{i}", c) for i, c in enumerate(items)]
        if not coeffs or all(c == 0.0 for c in coeffs):
            raise ConfigurationError("At least one non-zero coefficient required")
        self.coefficients = tuple(coeffs)
        self._poly = Polynomial(np.array(coeffs, dtype=float))

    @classmethod
    def power_law(cls, k: float, n: int) -> "PolynomialEquilibrium":
        """y = k x^n"""
        if int(n) != n or n < 1:
            raise ConfigurationError(f"n must be a positive integer, got {n}")
        coeffs = [0.0] * int(n) + [k]
        return cls(coeffs)

    def y_of_x(self, x: float) -> float:
        return float(self._poly(check_finite("x", x)))

    def describe(self) -> str:
        terms = [f"{c:g}*x^{i}" for i, c in enumerate(self.coefficients) if c != 0.0]
        return " + ".join(terms)


__all__ = ['PolynomialEquilibrium']
