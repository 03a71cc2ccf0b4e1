"""Test class ExpressionParser."""

import pytest

from pocket_calculator.common.parser import ExpressionParser


def test_tokenize_basic():
    """Tokenize splits a simple expression into correct tokens."""
    expr = "3 + 4 * 2"
    tokens = ExpressionParser.tokenize(expr)
    assert tokens == ["3", "+", "4", "*", "2"]


def test_tokenize_without_spaces():
    """Tokenize does not need whitespace between tokens."""
    assert ExpressionParser.tokenize("(1.5+.5)*2.") == ["(", "1.5", "+", ".5", ")", "*", "2."]


def test_tokenize_rejects_unknown_character():
    """Letters and other symbols are not part of an arithmetic expression."""
    with pytest.raises(ValueError):
        ExpressionParser.tokenize("2+x")


@pytest.mark.parametrize("token,expected", [
    ("123", True),
    ("45.67", True),
    ("-8.9", True),
    ("abc", False),
    ("+", False),
])
def test_is_number_true(token, expected):
    """_is_number correctly identifies numbers."""
    assert ExpressionParser._is_number(token) == expected


def test_to_rpn_basic():
    """to_rpn converts tokens to correct Reverse Polish Notation."""
    tokens = ["3", "+", "4", "*", "2"]
    rpn = ExpressionParser.to_rpn(tokens)
    # Numbers in order, operators according to precedence
    assert rpn == ["3", "4", "2", "*", "+"]


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", ["3", "4", "+"]),
    ("3 + 4 * 2", ["3", "4", "2", "*", "+"]),
    ("10 / 2 - 1", ["10", "2", "/", "1", "-"]),
    ("(3 + 4) * 2", ["3", "4", "+", "2", "*"]),
    ("-3 * 2", ["3", "u-", "2", "*"]),
    ("2 * -3", ["2", "3", "u-", "*"]),
])
def test_to_rpn_various(expr, expected):
    """to_rpn handles precedence, parentheses and unary signs."""
    tokens = ExpressionParser.tokenize(expr)
    rpn = ExpressionParser.to_rpn(tokens)
    assert rpn == expected


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", 7.0),
    ("10 - 2", 8.0),
    ("3 * 5", 15.0),
    ("8 / 2", 4.0),
    ("3 + 4 * 2", 11.0),  # tests precedence
    ("7 + 3 * 2 - 4 / 2", 11.0),
    ("10 - 4 - 3", 3.0),  # left associativity
    ("(3 + 4) * 2", 14.0),
    ("((2))", 2.0),
    ("-(2 + 3)", -5.0),
    ("2--3", 5.0),
    ("2+2", 4.0),
])
def test_evaluate_valid(expr, expected):
    """Evaluate returns correct result for valid expressions."""
    assert ExpressionParser.evaluate(expr) == expected


@pytest.mark.parametrize("expr", [
    "3 +",        # Trailing operator
    "+ 3 4",      # Leading sign, extra operand
    "3 *",        # Single number with trailing operator
    "3 4 + 5",    # Extra operand remaining
    "",           # Empty expression
    "   ",        # Whitespace only
    "* 3",        # Leading binary operator
    "(2 + 3",     # Unclosed parenthesis
    "2 + 3)",     # Unopened parenthesis
    "()",         # Empty parentheses
    "2(3)",       # Implicit multiplication is not supported
    "-",          # Sign without operand
    "1.2.3",      # Two decimal points
])
def test_evaluate_invalid_expression(expr):
    """Evaluate raises ValueError for malformed expressions."""
    with pytest.raises(ValueError):
        ExpressionParser.evaluate(expr)


def test_evaluate_division_by_zero():
    """Division by zero is reported by the evaluator."""
    with pytest.raises(ZeroDivisionError):
        ExpressionParser.evaluate("1 / (2 - 2)")


@pytest.mark.parametrize("expr,expected", [
    ("1e-7", ["1e-7"]),
    ("9.9e+21*2", ["9.9e+21", "*", "2"]),
    ("1E3-.5e1", ["1E3", "-", ".5e1"]),
])
def test_tokenize_exponent(expr, expected):
    """Numbers written with an exponent stay a single token."""
    assert ExpressionParser.tokenize(expr) == expected


def test_evaluate_exponent():
    """Exponent literals evaluate like any other number."""
    assert ExpressionParser.evaluate("1e3 + 2.5e-1 * 2") == 1000.5
