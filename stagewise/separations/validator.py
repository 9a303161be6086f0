"""Parameter validation for every contacting variant"""

from dataclasses import dataclass
from typing import Optional, Union

from stagewise.core.validation import ConfigurationError, ErrorReason, StagingError
from .absorption import (
    ConcurrentSpec, CountercurrentSpec, CrosscurrentSpec,
    check_concurrent, check_countercurrent, check_crosscurrent,
)
from .distillation import DistillationSpec, check_distillation

StageSpec = Union[CountercurrentSpec, CrosscurrentSpec, ConcurrentSpec, DistillationSpec]

_CHECKS = (
    (CountercurrentSpec, check_countercurrent),
    (CrosscurrentSpec, check_crosscurrent),
    (ConcurrentSpec, check_concurrent),
    (DistillationSpec, check_distillation),
)


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: Optional[ErrorReason] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok


def check(config: StageSpec) -> StageSpec:
    """
    Raise the typed StagingError for the first failed check.

    Returns the configuration with its numeric fields converted.
    """
    for spec_type, check_fn in _CHECKS:
        if isinstance(config, spec_type):
            config = config.coerced()
            check_fn(config)
            return config
    raise ConfigurationError(f"Unsupported configuration type {type(config).__name__}")


def validate(config: StageSpec) -> ValidationResult:
    """
    Pure check of a configuration.

    Never raises for bad input and never mutates it; the first failure is
    reported as a (reason, message) pair.
    """
    try:
        check(config)
    except StagingError as exc:
        return ValidationResult(False, exc.reason, str(exc))
    return ValidationResult(True)


__all__ = ['StageSpec', 'ValidationResult', 'check', 'validate']
