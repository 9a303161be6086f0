"""Equilibrium relations y = f(x)"""

from .base import EquilibriumCurve
from .constant_alpha import BinaryConstantAlpha
from .linear_slope import LinearEquilibrium
from .polynomial import PolynomialEquilibrium
from .langmuir import LangmuirEquilibrium
from .tabulated import TabulatedEquilibrium
from .expression import ExpressionEquilibrium, CompiledExpression, parse_expression
from .descriptor import EquilibriumDescriptor, equilibrium_from_descriptor

__all__ = [
    'EquilibriumCurve',
    'BinaryConstantAlpha', 'LinearEquilibrium', 'PolynomialEquilibrium',
    'LangmuirEquilibrium', 'TabulatedEquilibrium',
    'ExpressionEquilibrium', 'CompiledExpression', 'parse_expression',
    'EquilibriumDescriptor', 'equilibrium_from_descriptor',
]
