"""
compute_stages: the single entry point a front end calls.

Validates a configuration, builds the stage ladder and converts every
StagingError into a StageResult with feasible=False. Stateless; the same
configuration always yields the same result.
"""

from dataclasses import replace
from typing import Any, Dict, Mapping, Tuple, Type, Union

from loguru import logger

from stagewise.core.validation import (
    ConfigurationError, ErrorReason, EvaluationError, NoIntersectionError,
    StageLimitExceeded, StagingError,
)
from .absorption import (
    ConcurrentSpec, CountercurrentSpec, CrosscurrentSpec,
    concurrent_details, concurrent_policy,
    countercurrent_details, countercurrent_policy,
    crosscurrent_details, crosscurrent_policy,
)
from .distillation import DistillationSpec, distillation_details, distillation_policy
from .records import (
    ConcurrentRecord, CountercurrentRecord, CrosscurrentRecord, DistillationRecord,
    StageRecord, parse_record,
)
from .staging import OrientationPolicy, StageBuilder, StageResult
from .validator import StageSpec, check

_SPECS: Dict[str, Tuple[Type, Type[StageRecord]]] = {
    "countercurrent": (CountercurrentSpec, CountercurrentRecord),
    "auto": (CountercurrentSpec, CountercurrentRecord),
    "absorption": (CountercurrentSpec, CountercurrentRecord),
    "stripping": (CountercurrentSpec, CountercurrentRecord),
    "crosscurrent": (CrosscurrentSpec, CrosscurrentRecord),
    "concurrent": (ConcurrentSpec, ConcurrentRecord),
    "distillation": (DistillationSpec, DistillationRecord),
}


def config_from_mapping(record: Mapping[str, Any]) -> StageSpec:
    """
    Typed spec from a plain record, dispatched on its ``mode`` key.

    "absorption" and "stripping" pin the countercurrent orientation;
    "countercurrent" or "auto" detect it from the terminal points.
    """
    if not isinstance(record, Mapping):
        raise ConfigurationError(f"Expected a mapping, got {type(record).__name__}")
    data = dict(record)
    mode = data.pop("mode", None)
    if not isinstance(mode, str) or mode not in _SPECS:
        raise ConfigurationError(f"Unknown mode {mode!r}; expected one of {sorted(_SPECS)}")

    spec_type, record_type = _SPECS[mode]
    params = parse_record(record_type, data, mode).spec_params()
    if spec_type is CountercurrentSpec:
        params["mode"] = "auto" if mode == "countercurrent" else mode
    return spec_type(**params)


def _policy(config: StageSpec) -> OrientationPolicy:
    if isinstance(config, CountercurrentSpec):
        return countercurrent_policy(config)
    if isinstance(config, CrosscurrentSpec):
        return crosscurrent_policy(config)
    if isinstance(config, ConcurrentSpec):
        return concurrent_policy(config)
    return distillation_policy(config)


def _details(config: StageSpec, result: StageResult) -> Dict[str, Any]:
    if isinstance(config, CountercurrentSpec):
        return countercurrent_details(config)
    if isinstance(config, CrosscurrentSpec):
        return crosscurrent_details(config, result)
    if isinstance(config, ConcurrentSpec):
        return concurrent_details(config)
    return distillation_details(config, result)


def _error_details(exc: StagingError) -> Dict[str, Any]:
    """Structured fields carried by the error, for the failure record"""
    if isinstance(exc, EvaluationError):
        return {"expression": exc.expression, "x": exc.x}
    if isinstance(exc, NoIntersectionError):
        return {"best_estimate": exc.best_estimate}
    return {}


def compute_stages(config: Union[StageSpec, Mapping[str, Any]]) -> StageResult:
    """
    Stage ladder for one configuration. Never raises for bad input.

    ``config`` is a typed spec or a plain record for config_from_mapping.
    A stage-limit hit keeps the partial ladder; every other failure
    discards it.
    """
    if isinstance(config, Mapping):
        mode = config.get("mode")
    else:
        mode = getattr(config, "mode", type(config).__name__)
    try:
        if isinstance(config, Mapping):
            config = config_from_mapping(config)
        config = check(config)
        result = StageBuilder(_policy(config)).solve()
        result = replace(result, details=_details(config, result))
    except StageLimitExceeded as exc:
        logger.warning("{} stage construction stopped at the stage limit: {}", mode, exc)
        return StageResult.failure(exc.reason, str(exc), vertices=exc.vertices)
    except StagingError as exc:
        logger.warning("{} configuration rejected ({}): {}", mode, exc.reason.value, exc)
        return StageResult.failure(exc.reason, str(exc), details=_error_details(exc))
    except (TypeError, ValueError, ArithmeticError) as exc:
        logger.exception("{} configuration could not be evaluated", mode)
        return StageResult.failure(ErrorReason.INVALID_PARAMETER, f"Invalid configuration: {exc}")

    logger.info(
        "{} computed: {} stages (fractional {:.4g})",
        mode, result.stage_count, result.fractional_stages,
    )
    return result


__all__ = ['compute_stages', 'config_from_mapping']
