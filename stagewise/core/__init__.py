# stagewise/core/__init__.py
"""Core utilities for all stage-construction calculations"""

from .validation import (
    ErrorReason,
    StagingError,
    ConfigurationError,
    InfeasibleGeometryError,
    EvaluationError,
    NoIntersectionError,
    StageLimitExceeded,
    check_finite,
    check_positive,
    check_non_negative,
    check_in_closed_01,
    check_in_open_01,
    check_flow_ratio,
    check_increasing,
    check_integer,
    check_interval,
)

from .numerical import (
    bisection,
    linear_interpolate,
    fraction_of_step,
)

from .base import (
    SolverBase,
    SpecificationBase,
)

__all__ = [
    # Errors
    'ErrorReason', 'StagingError', 'ConfigurationError', 'InfeasibleGeometryError',
    'EvaluationError', 'NoIntersectionError', 'StageLimitExceeded',

    # Validation
    'check_finite', 'check_positive', 'check_non_negative',
    'check_in_closed_01', 'check_in_open_01', 'check_flow_ratio', 'check_increasing',
    'check_integer', 'check_interval',

    # Numerical
    'bisection', 'linear_interpolate', 'fraction_of_step',

    # Base Classes
    'SolverBase', 'SpecificationBase',
]
