"""Plain-record schemas for the simulator front ends"""

from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stagewise.core.validation import ConfigurationError


class StageRecord(BaseModel):
    """Accepts both the front ends' camelCase keys and the spec field names"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def spec_params(self) -> Dict[str, Any]:
        """Keyword arguments for the matching spec; omitted keys keep the spec defaults"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class CountercurrentRecord(StageRecord):
    equilibrium: Any = Field(alias="equilibriumFunction")
    Ls: float
    Gs: float
    x_in: float = Field(alias="xIn")
    y_in: float = Field(alias="yIn")
    x_out: float = Field(alias="xOut")
    x_upper: Optional[float] = Field(default=None, alias="xUpper")
    max_stages: Optional[int] = Field(default=None, alias="maxStages")
    tol: Optional[float] = None
    maxiter: Optional[int] = None


class CrosscurrentRecord(StageRecord):
    equilibrium: Any = Field(alias="equilibriumFunction")
    Ls: float
    Gs: float
    X0: float
    Y0: float
    stages: Optional[int] = Field(default=None, alias="numberOfStages")
    bracket: Optional[Tuple[float, float]] = None
    tol: Optional[float] = None
    maxiter: Optional[int] = None


class ConcurrentRecord(StageRecord):
    equilibrium: Any = Field(alias="equilibriumFunction")
    x_in: float = Field(alias="xIn")
    y_in: float = Field(alias="yIn")
    x_out: float = Field(alias="xOut")
    y_out: float = Field(alias="yOut")
    x_upper: Optional[float] = Field(default=None, alias="xUpper")
    max_stages: Optional[int] = Field(default=None, alias="maxStages")
    tol: Optional[float] = None
    maxiter: Optional[int] = None


class DistillationRecord(StageRecord):
    alpha: float = Field(alias="relativeVolatility")
    R: float = Field(alias="refluxRatio")
    q: float = Field(alias="liquidFractionInFeed")
    xF: float = Field(alias="feedComposition")
    xB: float = Field(alias="bottomComposition")
    xD: float = Field(alias="distillateComposition")
    murphree_efficiency: Optional[float] = Field(default=None, alias="murphreeEfficiency")
    max_stages: Optional[int] = Field(default=None, alias="maxStages")
    tol: Optional[float] = None
    maxiter: Optional[int] = None


def _location(error: Dict[str, Any]) -> str:
    return ".".join(str(part) for part in error["loc"])


def parse_record(record_type: Type[StageRecord], data: Dict[str, Any], mode: str) -> StageRecord:
    """Validate one record, reporting pydantic failures as ConfigurationError"""
    try:
        return record_type.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors()

    missing = [_location(e) for e in errors if e["type"] == "missing" and len(e["loc"]) == 1]
    if missing:
        raise ConfigurationError(f"Missing {mode} parameters: {', '.join(missing)}")
    unknown = [_location(e) for e in errors if e["type"] == "extra_forbidden"]
    if unknown:
        raise ConfigurationError(f"Unknown {mode} parameters: {', '.join(unknown)}")
    first = errors[0]
    raise ConfigurationError(f"Invalid {mode} parameter {_location(first)}: {first['msg']}")


__all__ = [
    'StageRecord', 'CountercurrentRecord', 'CrosscurrentRecord',
    'ConcurrentRecord', 'DistillationRecord', 'parse_record',
]
