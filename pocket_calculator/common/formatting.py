"""Number rounding and display rendering shared by both calculators."""
import math
import re
from typing import Union

# Significant digits kept after every arithmetic step
PRECISION: int = 12

# Internal operator symbol -> symbol shown on the display
DISPLAY_SYMBOLS: dict[str, str] = {"/": "÷", "*": "×"}

# Display/button symbol -> internal operator symbol
INPUT_SYMBOLS: dict[str, str] = {"÷": "/", "×": "*", "−": "-"}

_EXPONENT = re.compile(r"e([+-])0*(\d)")


def round_significant(value: float, digits: int = PRECISION) -> float:
    """
    Round a float to a number of significant digits.

    Suppresses binary representation artifacts, e.g. ``0.1 + 0.2`` becomes ``0.3``.

    :param float value: Raw result
    :param int digits: Significant digits to keep

    :return: Rounded value
    :rtype: float
    """
    if not math.isfinite(value):
        return value
    return float(f"{value:.{digits}g}")


def parse_operand(text: str) -> float:
    """
    Convert typed operand text to a float.

    Text that is not a number (such as an error message) gives NaN instead of raising.

    :param str text: Operand text, e.g. ``"12"``, ``"0."``, ``"-4.5"``

    :return: Parsed value or NaN
    :rtype: float
    """
    try:
        return float(text)
    except ValueError:
        return math.nan


def format_number(value: Union[float, int]) -> str:
    """
    Render a number for the display.

    Integral values drop their fractional part, exponents lose zero padding.

    :param value: Number to render

    :return: Display text, e.g. ``"4"``, ``"0.3"``, ``"1e-7"``, ``"NaN"``
    :rtype: str
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return _EXPONENT.sub(r"e\1\2", repr(value))


def display_symbol(op: str) -> str:
    """Translate an internal operator symbol to its display symbol."""
    return DISPLAY_SYMBOLS.get(op, op)


def normalize_operator(symbol: str) -> str:
    """Translate a display or button symbol to the internal operator symbol."""
    return INPUT_SYMBOLS.get(symbol, symbol)
