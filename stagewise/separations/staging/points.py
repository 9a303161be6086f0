"""Stage ladder data model: points, vertices and the result record"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Tuple

from stagewise.core.validation import ErrorReason


@dataclass(frozen=True)
class Point:
    """Coordinate in the x (liquid) - y (gas) composition plane"""
    x: float
    y: float


class VertexKind(str, Enum):
    START = "start"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    EQUILIBRIUM = "equilibrium"
    FINAL = "final"


@dataclass(frozen=True)
class StageVertex:
    """
    One corner of the staircase.

    ``kind`` names the segment that reached the vertex (HORIZONTAL/VERTICAL)
    or its role (START, EQUILIBRIUM, FINAL). ``on_equilibrium`` marks the
    vertex where stage ``stage_index`` reached the equilibrium curve.
    """
    x: float
    y: float
    kind: VertexKind
    stage_index: int
    on_equilibrium: bool = False

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "kind": self.kind.value,
            "stage_index": self.stage_index,
            "on_equilibrium": self.on_equilibrium,
        }


@dataclass(frozen=True)
class StageResult:
    """
    Output of one stage construction.

    The stage count is read off the vertex sequence; it is never stored
    separately.
    """
    vertices: Tuple[StageVertex, ...] = ()
    feasible: bool = True
    error_reason: Optional[ErrorReason] = None
    message: str = ""
    fractional_stages: Optional[float] = None
    details: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def stage_count(self) -> int:
        return sum(1 for v in self.vertices if v.on_equilibrium)

    @property
    def equilibrium_points(self) -> Tuple[Point, ...]:
        return tuple(v.point for v in self.vertices if v.on_equilibrium)

    @property
    def last(self) -> Optional[StageVertex]:
        return self.vertices[-1] if self.vertices else None

    @classmethod
    def failure(
        cls,
        reason: ErrorReason,
        message: str,
        vertices: Tuple[StageVertex, ...] = (),
        details: Optional[Dict[str, Any]] = None,
    ) -> "StageResult":
        return cls(
            vertices=tuple(vertices),
            feasible=False,
            error_reason=reason,
            message=message,
            details=dict(details or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain record for a rendering layer"""
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "stage_count": self.stage_count,
            "feasible": self.feasible,
            "error_reason": self.error_reason.value if self.error_reason else None,
            "message": self.message,
            "fractional_stages": self.fractional_stages,
            "details": dict(self.details),
        }
