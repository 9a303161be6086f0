"""Concurrent contacting: operating line drawn between the feed and exit points"""
from dataclasses import dataclass
from typing import ClassVar, Dict, Any, Optional

from stagewise.core.base import SpecificationBase
from stagewise.core.validation import (
    InfeasibleGeometryError, check_finite, check_increasing, check_positive
)
from stagewise.separations.equilibrium import EquilibriumDescriptor, equilibrium_from_descriptor
from stagewise.separations.staging import (
    IntersectionSolver, OperatingLine, Orientation, OrientationPolicy, Point, Step
)


@dataclass(frozen=True)
class ConcurrentSpec(SpecificationBase):
    """
    Both phases move the same way through the stages. The operating line
    is fixed by its two end points instead of a flow ratio; both must lie
    above the equilibrium curve.
    """
    mode: ClassVar[str] = "concurrent"

    equilibrium: EquilibriumDescriptor
    x_in: float
    y_in: float
    x_out: float
    y_out: float

    # Numerical
    x_upper: Optional[float] = None
    max_stages: int = 50
    tol: float = 1e-6
    maxiter: int = 60


def concurrent_operating_line(spec: ConcurrentSpec) -> OperatingLine:
    return OperatingLine.from_points(Point(spec.x_in, spec.y_in), Point(spec.x_out, spec.y_out))


def check_concurrent(spec: ConcurrentSpec) -> None:
    x_in, _, x_out, _ = (
        check_finite(name, getattr(spec, name)) for name in ("x_in", "y_in", "x_out", "y_out")
    )
    check_positive("max_stages", spec.max_stages)
    check_increasing("x_in", x_in, "x_out", x_out)
    concurrent_operating_line(spec)

    curve = equilibrium_from_descriptor(spec.equilibrium)
    if spec.y_in <= curve.evaluate(spec.x_in):
        raise InfeasibleGeometryError("Feed point must lie above the equilibrium curve")
    if spec.y_out <= curve.evaluate(spec.x_out):
        raise InfeasibleGeometryError("Product point must lie above the equilibrium curve")


def concurrent_policy(spec: ConcurrentSpec) -> OrientationPolicy:
    curve = equilibrium_from_descriptor(spec.equilibrium)
    lo, hi = curve.domain
    upper = spec.x_upper if spec.x_upper is not None else max(1.0, 1.5 * spec.x_out)
    return OrientationPolicy(
        orientation=Orientation.CONCURRENT,
        curve=curve,
        start=Point(spec.x_in, spec.y_in),
        terminal=Point(spec.x_out, spec.y_out),
        operating_line=concurrent_operating_line(spec),
        equilibrium_step=Step.HORIZONTAL,
        direction=1,
        bracket=(lo, min(hi, upper)),
        max_stages=spec.max_stages,
        solver=IntersectionSolver(spec.tol, spec.maxiter),
    )


def concurrent_details(spec: ConcurrentSpec) -> Dict[str, Any]:
    line = concurrent_operating_line(spec)
    return {"operating_slope": line.slope, "operating_intercept": line.intercept}
