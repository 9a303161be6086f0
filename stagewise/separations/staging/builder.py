"""Stage-by-stage construction between equilibrium curve and operating line"""

from typing import List, Tuple
import math

from loguru import logger

from stagewise.core.base import SolverBase
from stagewise.core.numerical import fraction_of_step
from stagewise.core.validation import (
    ErrorReason, InfeasibleGeometryError, NoIntersectionError, StageLimitExceeded
)
from .operating_line import OperatingLine
from .points import Point, StageResult, StageVertex, VertexKind
from .policy import OrientationPolicy, Step


class StageBuilder(SolverBase):
    """
    Steps off theoretical stages for one OrientationPolicy.

    Stepwise variants alternate an equilibrium step and an operating-line
    step until the liquid composition reaches the terminal point; an
    overshoot is closed with a FINAL vertex interpolated onto the terminal
    point along the operating line. Crosscurrent runs a fixed number of
    stages, each starting again from fresh solvent.

    solve() raises StagingError subclasses; StageLimitExceeded carries the
    partial ladder.
    """

    def __init__(self, policy: OrientationPolicy):
        self.policy = policy

    def solve(self) -> StageResult:
        if self.policy.is_crosscurrent:
            vertices = self._crosscurrent_ladder()
            return StageResult(vertices=tuple(vertices), fractional_stages=float(self.policy.stages))
        vertices, fractional = self._stepwise_ladder()
        return StageResult(vertices=tuple(vertices), fractional_stages=fractional)

    # ------------------------------------------------------------------
    # counter-current, concurrent and distillation
    # ------------------------------------------------------------------

    def _stepwise_ladder(self) -> Tuple[List[StageVertex], float]:
        p = self.policy
        x, y = p.start.x, p.start.y
        vertices = [StageVertex(x, y, VertexKind.START, 0)]

        for stage in range(1, int(p.max_stages) + 1):
            x_prev = x
            if p.equilibrium_step is Step.HORIZONTAL:
                x = self._horizontal_to_curve(x, y)
                vertices.append(StageVertex(x, y, VertexKind.HORIZONTAL, stage, on_equilibrium=True))
                y = p.operating_line.value_at(x)
                vertices.append(StageVertex(x, y, VertexKind.VERTICAL, stage))
            else:
                y = p.curve.evaluate(x)
                vertices.append(StageVertex(x, y, VertexKind.VERTICAL, stage, on_equilibrium=True))
                x = p.operating_line.x_at(y)
                vertices.append(StageVertex(x, y, VertexKind.HORIZONTAL, stage))

            logger.debug("{} stage {}: x={:.6g}, y={:.6g}", p.orientation.value, stage, x, y)
            self._check_finite(x, y, stage)
            if abs(x - x_prev) <= 1e-12:
                raise NoIntersectionError(
                    f"Stage {stage} made no progress from x={x_prev:.6g}; "
                    f"the operating line meets the equilibrium curve there"
                )

            if self._reached(x):
                frac = fraction_of_step(x_prev, x, p.terminal.x)
                if abs(x - p.terminal.x) > 1e-12:
                    vertices.append(StageVertex(
                        p.terminal.x, p.terminal.y, VertexKind.FINAL, stage
                    ))
                return vertices, (stage - 1) + frac

            if x < 0 or y < 0:
                raise InfeasibleGeometryError(
                    f"Stage {stage} left the physical domain at ({x:.6g}, {y:.6g})",
                    ErrorReason.NON_PHYSICAL_STATE,
                )

        logger.warning(
            "{} ladder hit the {}-stage limit before x={}",
            p.orientation.value, p.max_stages, p.terminal.x,
        )
        raise StageLimitExceeded(
            f"Exceeded {p.max_stages} stages without reaching x={p.terminal.x}",
            vertices,
        )

    def _horizontal_to_curve(self, x: float, y: float) -> float:
        """x on the equilibrium curve at gas composition y, searched in the direction of travel"""
        lo, hi = self.policy.bracket
        if self.policy.direction > 0:
            start, end = min(max(x, lo), hi), hi
        else:
            start, end = lo, max(min(x, hi), lo)
        return self.policy.solver.find_intersection(start, end, y, self.policy.curve)

    def _reached(self, x: float) -> bool:
        x_end = self.policy.terminal.x
        if self.policy.direction > 0:
            return x >= x_end - 1e-12
        return x <= x_end + 1e-12

    @staticmethod
    def _check_finite(x: float, y: float, stage: int) -> None:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InfeasibleGeometryError(
                f"Stage {stage} produced a non-finite point ({x}, {y})",
                ErrorReason.NON_PHYSICAL_STATE,
            )

    # ------------------------------------------------------------------
    # crosscurrent
    # ------------------------------------------------------------------

    def _crosscurrent_ladder(self) -> List[StageVertex]:
        """
        Stage n: fresh solvent X0 meets gas Y(n); the line of slope -Ls/Gs
        through (X0, Y(n)) cuts the equilibrium curve at the stage outlet,
        whose y becomes Y(n+1).
        """
        p = self.policy
        lo, hi = p.bracket
        X0, Y = p.start.x, p.start.y
        vertices: List[StageVertex] = []

        for stage in range(1, int(p.stages) + 1):
            vertices.append(StageVertex(X0, Y, VertexKind.START, stage))
            line = OperatingLine.from_slope_point(-p.flow_ratio, Point(X0, Y))
            x_eq = p.solver.find_intersection(lo, hi, line, p.curve)
            y_eq = p.curve.evaluate(x_eq)
            self._check_finite(x_eq, y_eq, stage)
            vertices.append(StageVertex(x_eq, y_eq, VertexKind.EQUILIBRIUM, stage, on_equilibrium=True))
            logger.debug("crosscurrent stage {}: X={:.6g}, Y={:.6g}", stage, x_eq, y_eq)
            Y = y_eq

        vertices.append(StageVertex(X0, Y, VertexKind.START, p.stages + 1))
        return vertices


def build_stages(policy: OrientationPolicy) -> StageResult:
    return StageBuilder(policy).solve()


__all__ = ['StageBuilder', 'build_stages']
