"""Translate button labels and key names into calculator actions."""
from typing import Literal, Optional, Tuple

from pocket_calculator.common.models import Action, EXPRESSION_CHARACTERS

Mode = Literal["keypad", "expression"]

KeyBinding = Tuple[Action, Optional[str]]

# Keys with a fixed meaning on the keypad calculator (buttons and keyboard)
KEYPAD_KEYS: dict[str, KeyBinding] = {
    ".": (Action.DECIMAL, None),
    "%": (Action.PERCENT, None),
    "=": (Action.CALCULATE, None),
    "Enter": (Action.CALCULATE, None),
    "AC": (Action.CLEAR, None),
    "Escape": (Action.CLEAR, None),
    "c": (Action.CLEAR, None),
    "C": (Action.CLEAR, None),
    "DEL": (Action.BACKSPACE, None),
    "Backspace": (Action.BACKSPACE, None),
}

KEYPAD_OPERATOR_KEYS: tuple[str, ...] = ("+", "-", "−", "*", "×", "/", "÷")

# Keys with a fixed meaning on the expression calculator
EXPRESSION_KEYS: dict[str, KeyBinding] = {
    "Enter": (Action.CALCULATE, None),
    "=": (Action.CALCULATE, None),
    "Backspace": (Action.BACKSPACE, None),
    "c": (Action.CLEAR, None),
    "C": (Action.CLEAR, None),
}


def translate_key(key: str, mode: Mode = "keypad") -> KeyBinding:
    """
    Map a button label or key name to an action and its payload.

    :param str key: Button label (``"7"``, ``"×"``, ``"AC"``) or key name (``"Enter"``)
    :param str mode: Calculator variant the key is meant for

    :return: Tuple of (Action, payload)
    :rtype: Tuple[Action, Optional[str]]
    :raises ValueError: If the key has no meaning for the calculator variant
    """
    if mode == "keypad":
        if len(key) == 1 and key in "0123456789":
            return Action.DIGIT, key
        if key in KEYPAD_OPERATOR_KEYS:
            return Action.OPERATOR, key
        if key in KEYPAD_KEYS:
            return KEYPAD_KEYS[key]
    elif mode == "expression":
        if key in EXPRESSION_KEYS:
            return EXPRESSION_KEYS[key]
        if len(key) == 1 and key in EXPRESSION_CHARACTERS:
            return Action.APPEND, key
    else:
        raise ValueError(f"Unknown calculator mode: {mode!r}")

    raise ValueError(f"Key {key!r} is not bound in {mode} mode")
