"""Build an equilibrium curve from a UI-level descriptor"""

from typing import Any, Mapping, Union

from stagewise.core.validation import ConfigurationError, EvaluationError
from .base import EquilibriumCurve
from .constant_alpha import BinaryConstantAlpha
from .expression import ExpressionEquilibrium
from .langmuir import LangmuirEquilibrium
from .linear_slope import LinearEquilibrium
from .polynomial import PolynomialEquilibrium
from .tabulated import TabulatedEquilibrium

EquilibriumDescriptor = Union[EquilibriumCurve, str, Mapping[str, Any]]

_MODELS = {
    "constant_alpha": lambda p: BinaryConstantAlpha(p["alpha"]),
    "linear": lambda p: LinearEquilibrium(p["m"], p.get("b", 0.0)),
    "polynomial": lambda p: PolynomialEquilibrium(p["coefficients"]),
    "power_law": lambda p: PolynomialEquilibrium.power_law(p["k"], p["n"]),
    "langmuir": lambda p: LangmuirEquilibrium(p["a"], p["b"]),
    "tabulated": lambda p: TabulatedEquilibrium(p["x"], p["y"], p.get("extrapolate", False)),
    "expression": lambda p: ExpressionEquilibrium(p["expression"], p.get("variable", "x")),
}


def equilibrium_from_descriptor(desc: EquilibriumDescriptor) -> EquilibriumCurve:
    """
    Accepts a curve instance, an expression string such as ``"2*x^2"``,
    or a mapping like ``{"model": "constant_alpha", "alpha": 4.0}``.
    """
    if isinstance(desc, EquilibriumCurve):
        return desc
    if isinstance(desc, str):
        return ExpressionEquilibrium(desc)
    if isinstance(desc, Mapping):
        model = desc.get("model")
        if not isinstance(model, str) or model not in _MODELS:
            raise EvaluationError(
                f"Unknown equilibrium model {model!r}; expected one of {sorted(_MODELS)}"
            )
        try:
            return _MODELS[model](desc)
        except KeyError as exc:
            raise ConfigurationError(f"Equilibrium model {model!r} missing parameter {exc}")
        except (TypeError, ValueError) as exc:
            raise EvaluationError(f"Equilibrium model {model!r} has invalid parameters: {exc}")
    raise EvaluationError(f"Cannot build an equilibrium curve from {type(desc).__name__}")


__all__ = ['EquilibriumDescriptor', 'equilibrium_from_descriptor']
