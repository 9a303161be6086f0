# stagewise/__init__.py
"""
stagewise: graphical stage construction for mass-transfer operations.

    from stagewise import CountercurrentSpec, compute_stages

    result = compute_stages(CountercurrentSpec("2*x^2", Ls=130, Gs=50,
                                               x_in=0.39, y_in=0.36, x_out=0.87))
    result.stage_count
"""

from .core import ErrorReason, StagingError

from .separations import (
    Point,
    StageVertex,
    StageResult,
    VertexKind,
    CountercurrentSpec,
    CrosscurrentSpec,
    ConcurrentSpec,
    DistillationSpec,
    ValidationResult,
    validate,
    compute_stages,
    config_from_mapping,
    plot_stage_result,
)

__version__ = "0.1.0"

__all__ = [
    'ErrorReason', 'StagingError',
    'Point', 'StageVertex', 'StageResult', 'VertexKind',
    'CountercurrentSpec', 'CrosscurrentSpec', 'ConcurrentSpec', 'DistillationSpec',
    'ValidationResult', 'validate', 'compute_stages', 'config_from_mapping',
    'plot_stage_result',
]
