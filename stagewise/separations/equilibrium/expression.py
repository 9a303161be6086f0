"""
User-supplied equilibrium expressions, e.g. ``"2 * x^2"`` or ``"3.6*x*x"``.

The text is parsed by a small recursive-descent parser into a tree and
evaluated without any host-language evaluation facility. Accepted input:

    numeric literals      2, 0.5, .5, 1e-3
    the free variable     x (configurable)
    operators             + - * / ^  (``**`` is read as ``^``), unary + -
    parentheses
    functions             sqrt exp log ln log10 sin cos tan asin acos atan
                          sinh cosh tanh abs

Everything else is rejected at parse time with EvaluationError.
"""

from typing import Callable, Dict, List, Tuple, Union
import math
import re

from stagewise.core.validation import EvaluationError
from .base import EquilibriumCurve

MAX_LENGTH = 256
MAX_NODES = 200
MAX_DEPTH = 32

FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sqrt": math.sqrt,
    "exp": math.exp,
    "log": math.log,
    "ln": math.log,
    "log10": math.log10,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "sinh": math.sinh,
    "cosh": math.cosh,
    "tanh": math.tanh,
    "abs": math.fabs,
}

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|(?P<name>[A-Za-z_][A-Za-z_0-9]*)"
    r"|(?P<op>\*\*|[-+*/^()])"
    r")"
)

Token = Tuple[str, str]
Node = Tuple


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None or m.end() == pos:
            raise EvaluationError(
                f"Unexpected character {text[pos:].lstrip()[:1]!r} at position {pos}",
                expression=text,
            )
        kind = m.lastgroup
        value = m.group(kind)
        if kind == "op" and value == "**":
            value = "^"
        tokens.append((kind, value))
        pos = m.end()
    return tokens


class _Parser:
    """Recursive descent over the token list, producing tuple nodes"""

    def __init__(self, text: str, tokens: List[Token], variable: str):
        self.text = text
        self.tokens = tokens
        self.variable = variable
        self.pos = 0
        self.nodes = 0
        self.depth = 0

    def error(self, message: str) -> EvaluationError:
        return EvaluationError(message, expression=self.text)

    def peek(self) -> Union[Token, None]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise self.error("Unexpected end of expression")
        self.pos += 1
        return tok

    def expect(self, value: str) -> None:
        tok = self.take()
        if tok != ("op", value):
            raise self.error(f"Expected {value!r}, got {tok[1]!r}")

    def node(self, *parts) -> Node:
        self.nodes += 1
        if self.nodes > MAX_NODES:
            raise self.error(f"Expression too complex (more than {MAX_NODES} nodes)")
        return parts

    def parse(self) -> Node:
        if not self.tokens:
            raise self.error("Empty expression")
        tree = self.expr()
        if self.peek() is not None:
            raise self.error(f"Unexpected token {self.peek()[1]!r}")
        return tree

    def expr(self) -> Node:
        left = self.term()
        while self.peek() in (("op", "+"), ("op", "-")):
            op = self.take()[1]
            left = self.node("bin", op, left, self.term())
        return left

    def term(self) -> Node:
        left = self.unary()
        while self.peek() in (("op", "*"), ("op", "/")):
            op = self.take()[1]
            left = self.node("bin", op, left, self.unary())
        return left

    def unary(self) -> Node:
        if self.peek() in (("op", "+"), ("op", "-")):
            op = self.take()[1]
            operand = self.unary()
            return operand if op == "+" else self.node("neg", operand)
        return self.power()

    def power(self) -> Node:
        base = self.atom()
        if self.peek() == ("op", "^"):
            self.take()
            # right-associative, binds tighter than unary minus on the left
            return self.node("bin", "^", base, self.unary())
        return base

    def atom(self) -> Node:
        kind, value = self.take()
        if kind == "num":
            return self.node("num", float(value))
        if kind == "name":
            if value == self.variable:
                return self.node("var")
            if value in FUNCTIONS:
                self.expect("(")
                arg = self.nested()
                self.expect(")")
                return self.node("call", value, arg)
            raise self.error(f"Unknown name {value!r}")
        if value == "(":
            inner = self.nested()
            self.expect(")")
            return inner
        raise self.error(f"Unexpected token {value!r}")

    def nested(self) -> Node:
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise self.error(f"Expression nested deeper than {MAX_DEPTH} levels")
        tree = self.expr()
        self.depth -= 1
        return tree


def _eval(node: Node, x: float) -> float:
    tag = node[0]
    if tag == "num":
        return node[1]
    if tag == "var":
        return x
    if tag == "neg":
        return -_eval(node[1], x)
    if tag == "call":
        return FUNCTIONS[node[1]](_eval(node[2], x))
    op, a, b = node[1], _eval(node[2], x), _eval(node[3], x)
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return a / b
    return math.pow(a, b)


class CompiledExpression:
    """Parsed expression with a single free variable"""

    def __init__(self, text: str, variable: str = "x"):
        if not isinstance(text, str):
            raise EvaluationError(f"Expression must be a string, got {type(text).__name__}")
        if len(text) > MAX_LENGTH:
            raise EvaluationError(
                f"Expression longer than {MAX_LENGTH} characters", expression=text[:MAX_LENGTH]
            )
        self.text = text.strip()
        self.variable = variable
        self.tree = _Parser(self.text, tokenize(self.text), variable).parse()

    def __call__(self, x: float) -> float:
        try:
            value = _eval(self.tree, float(x))
        except (ZeroDivisionError, OverflowError, ValueError) as exc:
            raise EvaluationError(
                f"Cannot evaluate {self.text!r} at {self.variable}={x}: {exc}",
                expression=self.text, x=x,
            )
        if not math.isfinite(value):
            raise EvaluationError(
                f"{self.text!r} is not finite at {self.variable}={x}",
                expression=self.text, x=x,
            )
        return value


def parse_expression(text: str, variable: str = "x") -> CompiledExpression:
    return CompiledExpression(text, variable)


class ExpressionEquilibrium(EquilibriumCurve):
    """Equilibrium curve y = f(x) from a restricted arithmetic expression"""

    def __init__(self, text: str, variable: str = "x", domain: Tuple[float, float] = (0.0, math.inf)):
        self.expression = parse_expression(text, variable)
        self.domain = (float(domain[0]), float(domain[1]))

    def y_of_x(self, x: float) -> float:
        return self.expression(x)

    def describe(self) -> str:
        return self.expression.text


__all__ = ['ExpressionEquilibrium', 'CompiledExpression', 'parse_expression', 'FUNCTIONS']
