"""Tests for the custom biomass equation evaluator.

Covers accepted syntax, rejection of anything outside the arithmetic
sandbox and the invalid sentinel for run-time failures.
"""

import math

import pytest

from carbon_core.allometry import default_biomass_kg
from carbon_core.expression import (
    ExpressionError,
    evaluate_expression,
    is_valid_expression,
    parse_expression,
)


def test_default_equation_round_trip():
    v = evaluate_expression("exp(-1.996 + 2.32*ln(D))", 10)
    assert math.isclose(v, default_biomass_kg(10, "dry"))
    v = evaluate_expression("exp(-2.134 + 2.530*ln(D))", 7.5)
    assert math.isclose(v, default_biomass_kg(7.5, "moist"))


@pytest.mark.parametrize(
    "expr, d, expected",
    [
        ("1 + 2 * 3", 0, 7),
        ("(1 + 2) * 3", 0, 9),
        ("10 / 4 / 5", 0, 0.5),
        ("2 - 3 - 4", 0, -5),
        ("-D", 3, -3),
        ("--D", 3, 3),
        ("+D * -2", 3, -6),
        ("D*D", 4, 16),
        ("sqrt(D)", 16, 4),
        ("pow(D, 3)", 2, 8),
        ("min(D, 5)", 7, 5),
        ("max(D, 5, 9)", 7, 9),
        ("EXP(0) + Ln(1)", 1, 1),
        ("1e3 * D", 2, 2000),
        (".5 * D", 4, 2),
        ("2.5E-1", 0, 0.25),
        ("  0.0673 * pow(0.6 * D*D * 12, 0.976)  ", 10, 0.0673 * math.pow(0.6 * 100 * 12, 0.976)),
    ],
)
def test_accepted_expressions(expr, d, expected):
    assert math.isclose(evaluate_expression(expr, d), expected)


MALICIOUS = [
    "constructor",
    "D.constructor",
    "__proto__",
    "D.__proto__",
    "prototype",
    "() => 1",
    "D => D",
    "new Date()",
    "new D",
    "Math.exp(D)",
    "alert(1)",
    "eval('1')",
    "__import__('os')",
    "os.system('ls')",
    "D; 1",
    "D[0]",
    "D ** 2",
    "D ^ 2",
    "x = 1",
    "`1`",
    "d",
    "exp",
    "this",
    "process",
]


@pytest.mark.parametrize("expr", MALICIOUS)
def test_sandbox_rejects(expr):
    assert evaluate_expression(expr, 10) is None
    assert not is_valid_expression(expr)
    with pytest.raises(ExpressionError):
        parse_expression(expr)


@pytest.mark.parametrize(
    "expr",
    ["", "   ", "(", "D +", "1 2", "2D", "exp()", "exp(1, 2)", "pow(2)", "min(1)", "(1, 2)", "sqrt D", "1 +* 2"],
)
def test_syntax_errors(expr):
    assert evaluate_expression(expr, 10) is None
    with pytest.raises(ExpressionError):
        parse_expression(expr)


@pytest.mark.parametrize(
    "expr, d",
    [
        ("ln(D)", 0),
        ("ln(D)", -1),
        ("sqrt(D)", -4),
        ("1 / D", 0),
        ("exp(D)", 1000),
        ("pow(D, 0.5)", -8),
        ("pow(D, -1)", 0),
        ("D * 1e308 * 10", 10),
    ],
)
def test_runtime_failures_return_invalid(expr, d):
    assert is_valid_expression(expr)
    assert evaluate_expression(expr, d) is None


def test_none_and_overlong_input():
    assert evaluate_expression(None, 1) is None
    assert not is_valid_expression(None)
    assert evaluate_expression("1+" * 400 + "1", 1) is None
    deep = "(" * 2000 + "D" + ")" * 2000
    assert evaluate_expression(deep, 1) is None


def test_parse_error_message():
    with pytest.raises(ExpressionError, match="Unknown name"):
        parse_expression("cos(D)")


@pytest.mark.parametrize("text", ["max(5, D - D)", "max(D - D, 5)", "min(5, D - D)", "min(D - D, 5)"])
def test_min_max_nan_argument_is_invalid(text):
    assert evaluate_expression(text, float("inf")) is None
    assert evaluate_expression(text, 3.0) == (5.0 if text.startswith("max") else 0.0)
