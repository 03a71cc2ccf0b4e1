"""Test number rounding and display rendering."""
import math

import pytest

from pocket_calculator.common.formatting import (
    display_symbol,
    format_number,
    normalize_operator,
    parse_operand,
    round_significant,
)


def test_round_significant_removes_float_artifacts() -> None:
    """0.1 + 0.2 rounds to exactly 0.3."""
    assert round_significant(0.1 + 0.2) == 0.3


def test_round_significant_keeps_non_finite() -> None:
    """NaN and infinities are returned unchanged."""
    assert math.isnan(round_significant(math.nan))
    assert round_significant(math.inf) == math.inf


@pytest.mark.parametrize("value,expected", [
    (4.0, "4"),
    (-0.0, "0"),
    (0.3, "0.3"),
    (-2.5, "-2.5"),
    (1e-7, "1e-7"),
    (1e21, "1e+21"),
    (math.nan, "NaN"),
    (math.inf, "Infinity"),
    (-math.inf, "-Infinity"),
])
def test_format_number(value, expected) -> None:
    """format_number drops useless fractions and normalizes special values."""
    assert format_number(value) == expected


@pytest.mark.parametrize("text,expected", [
    ("12", 12.0),
    ("0.", 0.0),
    ("-4.5", -4.5),
])
def test_parse_operand(text, expected) -> None:
    """Typed operands parse as floats."""
    assert parse_operand(text) == expected


def test_parse_operand_error_text_is_nan() -> None:
    """Error messages are not numbers."""
    assert math.isnan(parse_operand("Error: Div by 0"))


def test_operator_symbols() -> None:
    """Display and internal operator symbols translate both ways."""
    assert display_symbol("/") == "÷"
    assert display_symbol("*") == "×"
    assert display_symbol("+") == "+"
    assert normalize_operator("÷") == "/"
    assert normalize_operator("×") == "*"
    assert normalize_operator("−") == "-"
    assert normalize_operator("+") == "+"
