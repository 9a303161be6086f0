"""Orientation policies: how each contacting pattern steps between curve and line"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from stagewise.core.validation import ConfigurationError, check_interval, check_positive
from stagewise.separations.equilibrium import EquilibriumCurve
from .operating_line import AnyOperatingLine
from .points import Point
from .solver import IntersectionSolver


class Orientation(str, Enum):
    ABSORPTION = "absorption"
    STRIPPING = "stripping"
    CROSSCURRENT = "crosscurrent"
    CONCURRENT = "concurrent"
    DISTILLATION = "distillation"


class Step(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class OrientationPolicy:
    """
    Everything StageBuilder needs to know about one variant.

    Stepwise variants (absorption, stripping, concurrent, distillation) use
    ``operating_line``, ``terminal`` and ``direction`` (+1 when the liquid
    composition grows stage to stage, -1 when it falls). Crosscurrent uses
    ``flow_ratio`` and ``stages`` and resets to ``start.x`` every stage.
    ``bracket`` limits the x search for the equilibrium step.
    """
    orientation: Orientation
    curve: EquilibriumCurve
    start: Point
    bracket: Tuple[float, float]
    equilibrium_step: Step = Step.HORIZONTAL
    operating_line: Optional[AnyOperatingLine] = None
    terminal: Optional[Point] = None
    direction: int = 1
    flow_ratio: Optional[float] = None
    stages: Optional[int] = None
    max_stages: int = 100
    solver: IntersectionSolver = IntersectionSolver()

    def __post_init__(self):
        max_stages = check_positive("max_stages", self.max_stages)
        if int(max_stages) != max_stages:
            raise ConfigurationError(f"max_stages must be an integer, got {self.max_stages}")
        check_interval("bracket", self.bracket)
        if self.direction not in (1, -1):
            raise ConfigurationError(f"direction must be +1 or -1, got {self.direction}")
        if self.orientation is Orientation.CROSSCURRENT:
            if self.flow_ratio is None or self.stages is None:
                raise ConfigurationError("Crosscurrent policy needs flow_ratio and stages")
        elif self.operating_line is None or self.terminal is None:
            raise ConfigurationError(f"{self.orientation.value} policy needs operating_line and terminal")

    @property
    def is_crosscurrent(self) -> bool:
        return self.orientation is Orientation.CROSSCURRENT


__all__ = ['Orientation', 'Step', 'OrientationPolicy']
