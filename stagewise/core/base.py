# stagewise/core/base.py
"""Base classes for specs and solvers"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import Dict, Any, Optional, Tuple, get_type_hints

from .validation import check_finite, check_integer, check_interval


class SolverBase(ABC):
    """Base class for all solvers"""

    @abstractmethod
    def solve(self) -> Any:
        """Main solving method"""


def _optional_finite(name: str, value: Any) -> Optional[float]:
    return None if value is None else check_finite(name, value)


# Annotation -> converter applied by SpecificationBase.coerced
_CONVERTERS = {
    float: check_finite,
    int: check_integer,
    Optional[float]: _optional_finite,
    Tuple[float, float]: check_interval,
}


@dataclass(frozen=True)
class SpecificationBase:
    """Base class for all specifications"""

    def coerced(self) -> "SpecificationBase":
        """
        Copy with every numeric field converted to float or int.

        Raises ConfigurationError for the first value that is not a finite
        number (or, for int fields, not a whole number).
        """
        hints = get_type_hints(type(self))
        changes = {}
        for f in fields(self):
            convert = _CONVERTERS.get(hints.get(f.name))
            if convert is not None:
                changes[f.name] = convert(f.name, getattr(self, f.name))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, tagged with the spec's mode"""
        d = {f.name: getattr(self, f.name) for f in fields(self)
             if not f.name.startswith('_')}
        d["mode"] = getattr(self, "mode", None)
        return d
