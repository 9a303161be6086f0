"""Base classes for equilibrium curves"""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple
import math

import numpy as np

from stagewise.core.validation import (
    StagingError, EvaluationError, NoIntersectionError
)
from stagewise.core.numerical import bisection


class EquilibriumCurve(ABC):
    """
    Equilibrium relation y = f(x) between liquid and gas phase compositions.

    Implementations must be pure: repeated calls with the same x return the
    same value. ``domain`` bounds the x values the relation accepts.
    """

    domain: Tuple[float, float] = (0.0, math.inf)

    @abstractmethod
    def y_of_x(self, x: float) -> float:
        """Gas composition at equilibrium with liquid composition x"""

    def x_of_y(self, y: float) -> float:
        """Liquid composition at equilibrium with gas composition y (curve assumed increasing)"""
        lo, hi = self.domain
        if not math.isfinite(hi):
            hi = 1.0
            for _ in range(60):
                if self.evaluate(hi) >= y:
                    break
                hi *= 2.0
        try:
            return bisection(lambda x: self.evaluate(x) - y, lo, hi, tol=1e-12, maxiter=200)
        except NoIntersectionError:
            raise EvaluationError(f"No x on the curve gives y = {y}", expression=self.describe())

    def evaluate(self, x: float) -> float:
        """y_of_x with every failure mode mapped to EvaluationError"""
        try:
            y = self.y_of_x(x)
        except EvaluationError:
            raise
        except (ZeroDivisionError, OverflowError, ValueError, StagingError) as exc:
            raise EvaluationError(
                f"Equilibrium relation undefined at x={x}: {exc}",
                expression=self.describe(), x=x,
            )
        y = float(y)
        if not math.isfinite(y):
            raise EvaluationError(
                f"Equilibrium relation is not finite at x={x}",
                expression=self.describe(), x=x,
            )
        return y

    def sample(self, xs: Sequence[float]) -> np.ndarray:
        """Evaluate on a grid, e.g. for plotting"""
        return np.array([self.evaluate(float(x)) for x in np.asarray(xs, dtype=float)])

    def describe(self) -> str:
        return type(self).__name__
