# stagewise/separations/__init__.py
"""Stage construction for absorption, stripping and distillation"""

from .staging import (
    Point, VertexKind, StageVertex, StageResult,
    OperatingLine, SegmentedOperatingLine,
    IntersectionSolver, Orientation, OrientationPolicy, StageBuilder, build_stages,
)
from .absorption import CountercurrentSpec, CrosscurrentSpec, ConcurrentSpec
from .distillation import DistillationSpec
from .validator import ValidationResult, check, validate
from .compute import compute_stages, config_from_mapping
from .plotting import plot_stage_result

__all__ = [
    # Data model
    'Point', 'VertexKind', 'StageVertex', 'StageResult',

    # Construction
    'OperatingLine', 'SegmentedOperatingLine', 'IntersectionSolver',
    'Orientation', 'OrientationPolicy', 'StageBuilder', 'build_stages',

    # Specs
    'CountercurrentSpec', 'CrosscurrentSpec', 'ConcurrentSpec', 'DistillationSpec',

    # Entry points
    'ValidationResult', 'check', 'validate', 'compute_stages', 'config_from_mapping',
    'plot_stage_result',
]
