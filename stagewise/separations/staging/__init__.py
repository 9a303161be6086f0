"""Generic stage construction: data model, operating lines, solver, builder"""

from .points import Point, VertexKind, StageVertex, StageResult
from .operating_line import (
    OperatingLine,
    SegmentedOperatingLine,
    enriching_operating_line,
    q_line,
    intersect_lines,
    stripping_line_through,
)
from .solver import IntersectionSolver, find_intersection
from .policy import Orientation, Step, OrientationPolicy
from .builder import StageBuilder, build_stages

__all__ = [
    # Data model
    'Point', 'VertexKind', 'StageVertex', 'StageResult',

    # Operating lines
    'OperatingLine', 'SegmentedOperatingLine',
    'enriching_operating_line', 'q_line', 'intersect_lines', 'stripping_line_through',

    # Solver
    'IntersectionSolver', 'find_intersection',

    # Builder
    'Orientation', 'Step', 'OrientationPolicy', 'StageBuilder', 'build_stages',
]
