"""Crosscurrent contacting: fresh solvent to every stage"""
from dataclasses import dataclass
from typing import ClassVar, Dict, Any, Tuple

from stagewise.core.base import SpecificationBase
from stagewise.core.validation import (
    ConfigurationError, InfeasibleGeometryError, check_finite, check_flow_ratio,
    check_integer, check_interval,
)
from stagewise.separations.equilibrium import EquilibriumDescriptor, equilibrium_from_descriptor
from stagewise.separations.staging import (
    IntersectionSolver, Orientation, OrientationPolicy, Point, StageResult
)


@dataclass(frozen=True)
class CrosscurrentSpec(SpecificationBase):
    """
    Gas Gs passes through ``stages`` contactors in series; each receives
    fresh solvent Ls at X0. Stage n operating line:

        Y - Y(n) = -(Ls/Gs) (X - X0)

    and the stage outlet is its intersection with the equilibrium curve.
    """
    mode: ClassVar[str] = "crosscurrent"

    equilibrium: EquilibriumDescriptor
    Ls: float          # Solvent fed to each stage
    Gs: float          # Carrier gas
    X0: float          # Fresh solvent composition
    Y0: float          # Inlet gas composition
    stages: int = 3

    # Numerical
    bracket: Tuple[float, float] = (0.0, 1.0)
    tol: float = 1e-6
    maxiter: int = 60


def check_crosscurrent(spec: CrosscurrentSpec) -> None:
    check_flow_ratio(spec.Ls, spec.Gs)
    X0 = check_finite("X0", spec.X0)
    Y0 = check_finite("Y0", spec.Y0)
    if check_integer("stages", spec.stages) < 1:
        raise ConfigurationError(f"stages must be a positive integer, got {spec.stages}")
    check_interval("bracket", spec.bracket)

    curve = equilibrium_from_descriptor(spec.equilibrium)
    if Y0 <= curve.evaluate(X0):
        raise InfeasibleGeometryError("Operating point must be above the equilibrium curve")


def crosscurrent_policy(spec: CrosscurrentSpec) -> OrientationPolicy:
    return OrientationPolicy(
        orientation=Orientation.CROSSCURRENT,
        curve=equilibrium_from_descriptor(spec.equilibrium),
        start=Point(spec.X0, spec.Y0),
        bracket=check_interval("bracket", spec.bracket),
        flow_ratio=check_flow_ratio(spec.Ls, spec.Gs),
        stages=int(spec.stages),
        max_stages=max(int(spec.stages), 1),
        solver=IntersectionSolver(spec.tol, spec.maxiter),
    )


def crosscurrent_details(spec: CrosscurrentSpec, result: StageResult) -> Dict[str, Any]:
    outlets = result.equilibrium_points
    Y_final = outlets[-1].y if outlets else spec.Y0
    return {
        "operating_slope": -check_flow_ratio(spec.Ls, spec.Gs),
        "stage_outlets": [(p.x, p.y) for p in outlets],
        "Y_final": Y_final,
        "solute_removed": spec.Gs * (spec.Y0 - Y_final),
        "total_solvent": spec.Ls * spec.stages,
    }
