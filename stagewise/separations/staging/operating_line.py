"""Operating lines from mass balances"""

from dataclasses import dataclass
from typing import Tuple, Union
import math

from stagewise.core.validation import (
    ConfigurationError, ErrorReason, check_finite, check_positive, check_in_closed_01
)
from .points import Point


@dataclass(frozen=True)
class OperatingLine:
    """Straight operating line y = slope * x + intercept"""
    slope: float
    intercept: float

    def __post_init__(self):
        check_finite("slope", self.slope)
        check_finite("intercept", self.intercept)

    @classmethod
    def from_slope_point(cls, slope: float, point: Point) -> "OperatingLine":
        slope = check_finite("slope", slope)
        return cls(slope, point.y - slope * point.x)

    @classmethod
    def from_points(cls, a: Point, b: Point) -> "OperatingLine":
        dx = b.x - a.x
        if abs(dx) < 1e-14:
            if abs(b.y - a.y) < 1e-14:
                raise ConfigurationError(
                    f"Operating line points coincide at ({a.x}, {a.y})",
                    ErrorReason.COINCIDENT_POINTS,
                )
            raise ConfigurationError(f"Operating line through x={a.x} is vertical")
        return cls.from_slope_point((b.y - a.y) / dx, a)

    def value_at(self, x: float) -> float:
        return self.slope * x + self.intercept

    def x_at(self, y: float) -> float:
        if abs(self.slope) < 1e-14:
            raise ConfigurationError("Horizontal operating line cannot be inverted")
        return (y - self.intercept) / self.slope

    def segment_at(self, x: float) -> "OperatingLine":
        return self


@dataclass(frozen=True)
class SegmentedOperatingLine:
    """
    Two operating lines joined at x_switch: ``upper`` serves x >= x_switch,
    ``lower`` serves x < x_switch (rectifying / stripping sections).
    """
    upper: OperatingLine
    lower: OperatingLine
    x_switch: float

    def segment_at(self, x: float) -> OperatingLine:
        return self.upper if x >= self.x_switch else self.lower

    def value_at(self, x: float) -> float:
        return self.segment_at(x).value_at(x)

    def x_at(self, y: float) -> float:
        y_switch = self.upper.value_at(self.x_switch)
        line = self.upper if y >= y_switch else self.lower
        return line.x_at(y)


AnyOperatingLine = Union[OperatingLine, SegmentedOperatingLine]


def enriching_operating_line(R: float, xD: float) -> Tuple[float, float]:
    """
    Rectifying line for a total condenser, y = R/(R+1) x + xD/(R+1).

    Passes through (xD, xD). Returns (slope, intercept).
    """
    R = check_positive("R", R)
    xD = check_in_closed_01("xD", xD)
    return R / (R + 1.0), xD / (R + 1.0)


def q_line(q: float, xF: float) -> Tuple[float, float]:
    """
    Feed line through (xF, xF) with slope q/(q-1).

    Saturated liquid (q = 1) gives a vertical line, reported as (inf, xF).
    """
    q = check_finite("q", q)
    xF = check_in_closed_01("xF", xF)
    if abs(q - 1.0) < 1e-12:
        return math.inf, xF
    return q / (q - 1.0), xF / (1.0 - q)


def intersect_lines(
    m1: float, b1: float, m2: float, b2: float
) -> Tuple[float, float]:
    """Crossing of y = m1 x + b1 and y = m2 x + b2; an infinite slope means x = b"""
    vertical1, vertical2 = not math.isfinite(m1), not math.isfinite(m2)
    if vertical1 and vertical2:
        raise ConfigurationError("Both lines are vertical")
    if vertical1 or vertical2:
        x_v, m, b = (b1, m2, b2) if vertical1 else (b2, m1, b1)
        return x_v, m * x_v + b
    if abs(m1 - m2) < 1e-12:
        raise ConfigurationError(f"Lines with slope {m1:g} are parallel")
    x = (b2 - b1) / (m1 - m2)
    return x, m1 * x + b1


def stripping_line_through(xB: float, feed_point: Point) -> OperatingLine:
    """Stripping section line through (xB, xB) and the feed-line intersection"""
    check_in_closed_01("xB", xB)
    return OperatingLine.from_points(Point(xB, xB), feed_point)


__all__ = [
    'OperatingLine', 'SegmentedOperatingLine', 'AnyOperatingLine',
    'enriching_operating_line', 'q_line', 'intersect_lines', 'stripping_line_through',
]
