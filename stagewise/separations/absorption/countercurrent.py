# stagewise/separations/absorption/countercurrent.py
"""Countercurrent multistage absorption/stripping by stage stepping"""
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple

from stagewise.core.base import SpecificationBase
from stagewise.core.validation import (
    ConfigurationError, InfeasibleGeometryError, check_finite, check_flow_ratio,
    check_increasing, check_positive,
)
from stagewise.separations.equilibrium import (
    EquilibriumCurve, EquilibriumDescriptor, equilibrium_from_descriptor
)
from stagewise.separations.staging import (
    IntersectionSolver, OperatingLine, Orientation, OrientationPolicy, Point, Step
)

MODES = ("auto", "absorption", "stripping")


@dataclass(frozen=True)
class CountercurrentSpec(SpecificationBase):
    """
    Specification for a countercurrent tower on solute-free coordinates.

    Liquid (Ls) and gas (Gs) flow in opposite directions. The operating line
    passes through (x_in, y_in) with slope Ls/Gs and ends at x_out; y_out
    follows from the mass balance.

    For absorption the operating line lies above the equilibrium curve
    (gas loses solute to the liquid). For stripping it lies below.
    mode="auto" picks whichever side both terminal points are on.
    """
    equilibrium: EquilibriumDescriptor
    Ls: float          # Liquid flow rate
    Gs: float          # Gas flow rate
    x_in: float        # Liquid inlet
    y_in: float        # Gas composition paired with x_in
    x_out: float       # Liquid outlet (target)

    mode: str = "auto"

    # Numerical
    x_upper: Optional[float] = None
    max_stages: int = 100
    tol: float = 1e-6
    maxiter: int = 60


def outlet_gas_composition(Ls: float, Gs: float, x_in: float, y_in: float, x_out: float) -> float:
    """Mass balance Ls (x_out - x_in) = Gs (y_out - y_in)"""
    return y_in + check_flow_ratio(Ls, Gs) * (x_out - x_in)


def countercurrent_operating_line(Ls: float, Gs: float, x_in: float, y_in: float) -> OperatingLine:
    return OperatingLine.from_slope_point(check_flow_ratio(Ls, Gs), Point(x_in, y_in))


def side_of_curve(curve: EquilibriumCurve, point: Point) -> int:
    """+1 above the equilibrium curve, -1 below, 0 on it"""
    y_eq = curve.evaluate(point.x)
    if point.y > y_eq:
        return 1
    if point.y < y_eq:
        return -1
    return 0


def resolve_orientation(spec: CountercurrentSpec, curve: EquilibriumCurve) -> Orientation:
    """Absorption or stripping, checked against both terminal points"""
    if spec.mode not in MODES:
        raise ConfigurationError(f"Mode must be one of {MODES}, got {spec.mode!r}")

    y_out = outlet_gas_composition(spec.Ls, spec.Gs, spec.x_in, spec.y_in, spec.x_out)
    sides = (
        side_of_curve(curve, Point(spec.x_in, spec.y_in)),
        side_of_curve(curve, Point(spec.x_out, y_out)),
    )

    if spec.mode in ("auto", "absorption") and sides == (1, 1):
        return Orientation.ABSORPTION
    if spec.mode in ("auto", "stripping") and sides == (-1, -1):
        return Orientation.STRIPPING

    if spec.mode == "absorption":
        msg = "Feed and product points must both lie above the equilibrium curve for absorption"
    elif spec.mode == "stripping":
        msg = "Feed and product points must both lie below the equilibrium curve for stripping"
    else:
        msg = "Both feed and product points must be either above or below the equilibrium curve"
    raise InfeasibleGeometryError(msg)


def search_bracket(spec: CountercurrentSpec, curve: EquilibriumCurve) -> Tuple[float, float]:
    """x range for the equilibrium step; default upper bound max(1, 1.5 x_out)"""
    lo, hi = curve.domain
    upper = spec.x_upper if spec.x_upper is not None else max(1.0, 1.5 * spec.x_out)
    return lo, min(hi, upper)


def check_countercurrent(spec: CountercurrentSpec) -> Orientation:
    """Raise the typed error for the first failed check, else return the orientation"""
    check_flow_ratio(spec.Ls, spec.Gs)
    x_in, _, x_out = (check_finite(name, getattr(spec, name)) for name in ("x_in", "y_in", "x_out"))
    check_positive("max_stages", spec.max_stages)
    check_increasing("x_in", x_in, "x_out", x_out)
    if spec.x_upper is not None and check_finite("x_upper", spec.x_upper) <= x_out:
        raise ConfigurationError(f"x_upper must exceed x_out, got {spec.x_upper}")

    curve = equilibrium_from_descriptor(spec.equilibrium)
    return resolve_orientation(spec, curve)


def countercurrent_policy(spec: CountercurrentSpec) -> OrientationPolicy:
    curve = equilibrium_from_descriptor(spec.equilibrium)
    orientation = resolve_orientation(spec, curve)
    y_out = outlet_gas_composition(spec.Ls, spec.Gs, spec.x_in, spec.y_in, spec.x_out)

    return OrientationPolicy(
        orientation=orientation,
        curve=curve,
        start=Point(spec.x_in, spec.y_in),
        terminal=Point(spec.x_out, y_out),
        operating_line=countercurrent_operating_line(spec.Ls, spec.Gs, spec.x_in, spec.y_in),
        equilibrium_step=Step.HORIZONTAL if orientation is Orientation.ABSORPTION else Step.VERTICAL,
        direction=1,
        bracket=search_bracket(spec, curve),
        max_stages=spec.max_stages,
        solver=IntersectionSolver(spec.tol, spec.maxiter),
    )


def countercurrent_details(spec: CountercurrentSpec) -> Dict[str, Any]:
    line = countercurrent_operating_line(spec.Ls, spec.Gs, spec.x_in, spec.y_in)
    return {
        "y_out": outlet_gas_composition(spec.Ls, spec.Gs, spec.x_in, spec.y_in, spec.x_out),
        "operating_slope": line.slope,
        "operating_intercept": line.intercept,
        "solute_transferred": spec.Ls * (spec.x_out - spec.x_in),
    }
