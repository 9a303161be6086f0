"""
Tests for the restricted equilibrium expression parser.
"""

import math

import pytest

from stagewise.core.validation import ErrorReason, EvaluationError
from stagewise.separations.equilibrium import ExpressionEquilibrium, parse_expression
from stagewise.separations.equilibrium.expression import MAX_LENGTH, tokenize


class TestGrammar:

    @pytest.mark.parametrize("text, x, expected", [
        ("2 * x * x", 0.5, 0.5),
        ("2*x^2", 0.3, 0.18),
        ("2*x**2", 0.3, 0.18),
        ("3.60 * x * x", 0.5, 0.9),
        ("1e-1 + x", 0.2, 0.3),
        (".5*x", 2.0, 1.0),
        ("-x^2", 3.0, -9.0),
        ("2^-1", 0.0, 0.5),
        ("2^3^2", 0.0, 512.0),
        ("(1 + x) / (1 - x)", 0.5, 3.0),
        ("4*x/(1+3*x)", 0.45, 1.8 / 2.35),
        ("sqrt(x) + exp(0) + ln(1)", 4.0, 3.0),
        ("abs(-x)", 2.5, 2.5),
    ])
    def test_evaluates(self, text, x, expected):
        assert parse_expression(text)(x) == pytest.approx(expected)

    def test_custom_variable(self):
        f = parse_expression("2*X", variable="X")
        assert f(1.5) == pytest.approx(3.0)

    def test_power_is_normalised(self):
        assert tokenize("x**2") == [("name", "x"), ("op", "^"), ("num", "2")]


class TestRejection:

    @pytest.mark.parametrize("text", [
        "__import__('os')",
        "os.system('ls')",
        "x.real",
        "2x",
        "y + 1",
        "sqrt x",
        "x +",
        "(x",
        "x)",
        "",
        "   ",
        "[x]",
        "lambda: 1",
        "x; x",
    ])
    def test_rejected_at_parse_time(self, text):
        with pytest.raises(EvaluationError) as excinfo:
            parse_expression(text)
        assert excinfo.value.reason is ErrorReason.INVALID_EQUILIBRIUM_FUNCTION

    def test_length_ceiling(self):
        with pytest.raises(EvaluationError, match="longer than"):
            parse_expression("x+" * MAX_LENGTH + "x")

    def test_node_ceiling(self):
        with pytest.raises(EvaluationError, match="too complex"):
            parse_expression("+".join(["x"] * 120))

    def test_depth_ceiling(self):
        with pytest.raises(EvaluationError, match="nested deeper"):
            parse_expression("(" * 40 + "x" + ")" * 40)

    def test_non_string(self):
        with pytest.raises(EvaluationError):
            parse_expression(42)


class TestEvaluationFailures:

    def test_division_by_zero_carries_input(self):
        f = parse_expression("1/x")
        with pytest.raises(EvaluationError) as excinfo:
            f(0.0)
        assert excinfo.value.x == 0.0
        assert excinfo.value.expression == "1/x"

    def test_domain_error(self):
        with pytest.raises(EvaluationError):
            parse_expression("sqrt(x)")(-1.0)

    def test_overflow(self):
        with pytest.raises(EvaluationError):
            parse_expression("exp(x)")(1000.0)

    def test_curve_wraps_evaluation(self):
        curve = ExpressionEquilibrium("log(x)")
        with pytest.raises(EvaluationError):
            curve.evaluate(0.0)
        assert curve.evaluate(math.e) == pytest.approx(1.0)
