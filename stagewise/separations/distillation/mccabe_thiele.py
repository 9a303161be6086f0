"""McCabe-Thiele stage stepping for binary distillation at constant relative volatility"""

from dataclasses import dataclass
from typing import ClassVar, Dict, Any, Tuple
import math

from scipy.optimize import brentq

from stagewise.core.base import SpecificationBase
from stagewise.core.validation import (
    ConfigurationError, ErrorReason, check_finite, check_in_open_01, check_positive
)
from stagewise.separations.equilibrium import BinaryConstantAlpha, EquilibriumCurve
from stagewise.separations.staging import (
    IntersectionSolver, OperatingLine, Orientation, OrientationPolicy, Point,
    SegmentedOperatingLine, StageResult, Step,
    enriching_operating_line, intersect_lines, q_line, stripping_line_through,
)
from .efficiency import check_efficiency, real_stages


@dataclass(frozen=True)
class DistillationSpec(SpecificationBase):
    """Specification for McCabe-Thiele distillation with a total condenser"""
    mode: ClassVar[str] = "distillation"

    alpha: float       # Relative volatility (constant)
    R: float           # Reflux ratio
    q: float           # Feed quality (liquid fraction)
    xF: float          # Feed composition
    xB: float          # Bottoms composition
    xD: float          # Distillate composition
    murphree_efficiency: float = 1.0
    max_stages: int = 100
    tol: float = 1e-6
    maxiter: int = 60


class FenskeEquation:
    """
    Fenske equation for minimum stages at total reflux

    Nm = log {[xD/(1-xD)] [(1-xB)/xB]} / log alpha
    """

    @staticmethod
    def calculate(xD: float, xB: float, alpha: float) -> float:
        check_in_open_01("xD", xD)
        check_in_open_01("xB", xB)
        check_positive("alpha", alpha)

        if abs(alpha - 1.0) < 1e-10:
            return float('inf')

        numerator = math.log((xD / (1 - xD)) * ((1 - xB) / xB))
        return numerator / math.log(alpha)


class MinimumReflux:
    """
    Minimum reflux ratio from the pinch point (x', y')

    Rm/(Rm+1) = (xD - y')/(xD - x')
    """

    @staticmethod
    def calculate(xD: float, x_prime: float, y_prime: float) -> float:
        run = xD - x_prime
        ratio = (xD - y_prime) / run if abs(run) >= 1e-12 else math.inf
        # ratio is Rm/(Rm+1); at or above one the pinch cannot be reached
        return max(0.0, ratio / (1.0 - ratio)) if ratio < 1.0 else math.inf


def equilibrium_curve(spec: DistillationSpec) -> BinaryConstantAlpha:
    return BinaryConstantAlpha(spec.alpha)


def pinch_point(spec: DistillationSpec, curve: EquilibriumCurve) -> Tuple[float, float]:
    """Intersection of the q-line with the equilibrium curve"""
    mq, bq = q_line(spec.q, spec.xF)
    if not math.isfinite(mq):
        return spec.xF, curve.evaluate(spec.xF)

    def g(x: float) -> float:
        return curve.evaluate(x) - (mq * x + bq)

    # every q-line passes through (xF, xF), where the curve lies above it
    lo, hi = (spec.xF, 1.0) if spec.q > 1.0 else (0.0, spec.xF)
    x_prime = float(brentq(g, lo, hi, xtol=1e-14, maxiter=200))
    return x_prime, curve.evaluate(x_prime)


def minimum_reflux(spec: DistillationSpec) -> float:
    x_prime, y_prime = pinch_point(spec, equilibrium_curve(spec))
    return MinimumReflux.calculate(spec.xD, x_prime, y_prime)


def feed_line_intersection(spec: DistillationSpec) -> Point:
    """Where the rectifying line meets the q-line"""
    mR, bR = enriching_operating_line(spec.R, spec.xD)
    mq, bq = q_line(spec.q, spec.xF)
    x_int, y_int = intersect_lines(mR, bR, mq, bq)
    return Point(x_int, y_int)


def operating_lines(spec: DistillationSpec) -> SegmentedOperatingLine:
    """Rectifying above the feed-line intersection, stripping below; both meet there"""
    mR, bR = enriching_operating_line(spec.R, spec.xD)
    feed = feed_line_intersection(spec)
    return SegmentedOperatingLine(
        upper=OperatingLine(mR, bR),
        lower=stripping_line_through(spec.xB, feed),
        x_switch=feed.x,
    )


def check_distillation(spec: DistillationSpec) -> None:
    alpha = check_positive("alpha", spec.alpha)
    if alpha <= 1.0:
        raise ConfigurationError(f"alpha must be > 1 for separation, got {alpha}")
    check_positive("R", spec.R)
    check_finite("q", spec.q)
    for name in ("xB", "xF", "xD"):
        check_in_open_01(name, getattr(spec, name))
    if not (spec.xB < spec.xF < spec.xD):
        raise ConfigurationError(
            f"Compositions must satisfy xB < xF < xD, got xB={spec.xB}, xF={spec.xF}, xD={spec.xD}",
            ErrorReason.REVERSED_TERMINAL_ORDER,
        )
    check_efficiency("murphree_efficiency", spec.murphree_efficiency)
    check_positive("max_stages", spec.max_stages)

    R_min = minimum_reflux(spec)
    if not spec.R > R_min:
        raise ConfigurationError(
            f"Reflux ratio {spec.R} must exceed the minimum reflux ratio {R_min:.4g}",
            ErrorReason.REFLUX_BELOW_MINIMUM,
        )

    feed = feed_line_intersection(spec)
    if not (spec.xB < feed.x < spec.xD):
        raise ConfigurationError(
            f"Feed-line intersection x={feed.x:.4g} lies outside (xB, xD)"
        )


def distillation_policy(spec: DistillationSpec) -> OrientationPolicy:
    """Start at (xD, xD) for a total condenser and step down to (xB, xB)"""
    return OrientationPolicy(
        orientation=Orientation.DISTILLATION,
        curve=equilibrium_curve(spec),
        start=Point(spec.xD, spec.xD),
        terminal=Point(spec.xB, spec.xB),
        operating_line=operating_lines(spec),
        equilibrium_step=Step.HORIZONTAL,
        direction=-1,
        bracket=(0.0, 1.0),
        max_stages=spec.max_stages,
        solver=IntersectionSolver(spec.tol, spec.maxiter),
    )


def feed_stage(result: StageResult, x_switch: float) -> int:
    """First stage from the top whose liquid lies at or below the feed-line intersection"""
    stages = [v for v in result.vertices if v.on_equilibrium]
    for v in stages:
        if v.x <= x_switch + 1e-12:
            return v.stage_index
    return len(stages) + 1


def distillation_details(spec: DistillationSpec, result: StageResult) -> Dict[str, Any]:
    lines = operating_lines(spec)
    mq, bq = q_line(spec.q, spec.xF)
    return {
        "minimum_reflux": minimum_reflux(spec),
        "minimum_stages_total_reflux": FenskeEquation.calculate(spec.xD, spec.xB, spec.alpha),
        "operating_lines": {
            "rectifying": {"slope": lines.upper.slope, "intercept": lines.upper.intercept},
            "stripping": {"slope": lines.lower.slope, "intercept": lines.lower.intercept},
            "q_line": {"slope": mq, "intercept": bq},
        },
        "feed_intersection": (lines.x_switch, lines.upper.value_at(lines.x_switch)),
        "feed_stage_from_top": feed_stage(result, lines.x_switch),
        "real_stages": real_stages(result.stage_count, spec.murphree_efficiency),
    }
