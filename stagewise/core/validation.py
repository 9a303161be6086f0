# stagewise/core/validation.py
"""Unified validation and error taxonomy for all staging calculations"""
from enum import Enum
from typing import Union, Optional, Sequence, Any, Tuple
import math


class ErrorReason(str, Enum):
    """Closed set of reasons reported to callers of compute_stages"""
    INVALID_PARAMETER = "invalid_parameter"
    NON_POSITIVE_FLOW_RATIO = "non_positive_flow_ratio"
    COINCIDENT_POINTS = "coincident_points"
    REVERSED_TERMINAL_ORDER = "reversed_terminal_order"
    REFLUX_BELOW_MINIMUM = "reflux_below_minimum"
    OPERATING_POINT_ON_WRONG_SIDE = "operating_point_on_wrong_side"
    NON_PHYSICAL_STATE = "non_physical_state"
    INVALID_EQUILIBRIUM_FUNCTION = "invalid_equilibrium_function"
    NO_INTERSECTION = "no_intersection"
    STAGE_LIMIT_EXCEEDED = "stage_limit_exceeded"


class StagingError(Exception):
    """Base exception for all stage-construction calculations"""
    default_reason = ErrorReason.INVALID_PARAMETER

    def __init__(self, message: str, reason: Optional[ErrorReason] = None):
        super().__init__(message)
        self.reason = reason or self.default_reason


class ConfigurationError(StagingError):
    """Structurally invalid inputs"""
    default_reason = ErrorReason.INVALID_PARAMETER


class InfeasibleGeometryError(StagingError):
    """Operating point on the wrong side of the equilibrium curve"""
    default_reason = ErrorReason.OPERATING_POINT_ON_WRONG_SIDE


class EvaluationError(StagingError):
    """Equilibrium relation cannot be parsed or evaluated"""
    default_reason = ErrorReason.INVALID_EQUILIBRIUM_FUNCTION

    def __init__(self, message: str, expression: Optional[str] = None, x: Optional[float] = None):
        super().__init__(message)
        self.expression = expression
        self.x = x


class NoIntersectionError(StagingError):
    """Bisection could not locate the curve crossing"""
    default_reason = ErrorReason.NO_INTERSECTION

    def __init__(self, message: str, best_estimate: Optional[float] = None):
        super().__init__(message)
        self.best_estimate = best_estimate


class StageLimitExceeded(StagingError):
    """Safety bound on the stage count was hit before the terminal composition"""
    default_reason = ErrorReason.STAGE_LIMIT_EXCEEDED

    def __init__(self, message: str, vertices: Sequence[Any] = ()):
        super().__init__(message)
        self.vertices = tuple(vertices)


def check_finite(name: str, value: Union[float, int]) -> float:
    """Check value is a finite number"""
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(v):
        raise ConfigurationError(f"{name} must be finite, got {v}")
    return v


def check_positive(name: str, value: Union[float, int]) -> float:
    """Check value is positive"""
    v = check_finite(name, value)
    if v <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {v}")
    return v


def check_non_negative(name: str, value: Union[float, int]) -> float:
    """Check value is non-negative"""
    v = check_finite(name, value)
    if v < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {v}")
    return v


def check_in_closed_01(name: str, value: float) -> float:
    """Check value in [0, 1]"""
    v = check_finite(name, value)
    if not (0.0 <= v <= 1.0):
        raise ConfigurationError(f"{name} must be in [0, 1], got {v}")
    return v


def check_in_open_01(name: str, value: float) -> float:
    """Check value in (0, 1)"""
    v = check_finite(name, value)
    if not (0.0 < v < 1.0):
        raise ConfigurationError(f"{name} must satisfy 0 < {name} < 1, got {v}")
    return v


def check_flow_ratio(Ls: float, Gs: float) -> float:
    """Liquid-to-gas ratio Ls/Gs, finite and positive"""
    Ls = check_finite("Ls", Ls)
    Gs = check_finite("Gs", Gs)
    if Ls <= 0 or Gs <= 0:
        raise ConfigurationError(
            f"Flow rates must be > 0, got Ls={Ls}, Gs={Gs}",
            ErrorReason.NON_POSITIVE_FLOW_RATIO,
        )
    ratio = Ls / Gs
    if not math.isfinite(ratio):
        raise ConfigurationError(
            f"Flow ratio Ls/Gs must be finite, got {ratio}",
            ErrorReason.NON_POSITIVE_FLOW_RATIO,
        )
    return ratio


def check_increasing(lo_name: str, lo: float, hi_name: str, hi: float) -> None:
    """Check terminal ordering lo < hi"""
    if not hi > lo:
        raise ConfigurationError(
            f"{hi_name} must be greater than {lo_name}, got {hi_name}={hi}, {lo_name}={lo}",
            ErrorReason.REVERSED_TERMINAL_ORDER,
        )


def check_integer(name: str, value: Union[float, int]) -> int:
    """Check value is a whole number"""
    v = check_finite(name, value)
    if v != int(v):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(v)


def check_interval(name: str, value: Sequence[float]) -> Tuple[float, float]:
    """Check value is a (lo, hi) pair with lo < hi"""
    try:
        lo, hi = value
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a (lo, hi) pair, got {value!r}")
    lo = check_finite(f"{name}[0]", lo)
    hi = check_finite(f"{name}[1]", hi)
    if not hi > lo:
        raise ConfigurationError(f"{name} must satisfy lo < hi, got ({lo}, {hi})")
    return lo, hi
