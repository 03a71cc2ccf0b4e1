"""Pydantic models for calculator actions and history records."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from pocket_calculator.common.formatting import normalize_operator

# Operators accepted by the keypad calculator (internal symbols)
KEYPAD_OPERATORS: tuple[str, ...] = ("+", "-", "*", "/", "%")

# Characters the expression calculator appends verbatim
EXPRESSION_CHARACTERS: str = "0123456789+-*/.()"


class Action(str, Enum):
    """Logical calculator action, independent of the button or key that triggered it."""

    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    PERCENT = "percent"
    CALCULATE = "calculate"
    BACKSPACE = "backspace"
    CLEAR = "clear"
    APPEND = "append"


class ActionRequest(BaseModel):
    """A single action together with its validated payload."""

    model_config = ConfigDict(frozen=True)

    action: Action = Field(..., description="Action to perform")
    payload: Optional[str] = Field(default=None, validate_default=True, description="Digit, operator or character, if the action takes one")

    @field_validator("payload")
    def payload_must_match_action(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        """Ensure the payload matches what the action expects; operators are stored as internal symbols."""
        action = info.data.get("action")
        if action is None:
            # The action itself failed validation, which is reported separately
            return v
        if action is Action.DIGIT:
            if v is None or len(v) != 1 or v not in "0123456789":
                raise ValueError(f"Digit action expects a single digit, got {v!r}")
        elif action is Action.OPERATOR:
            if v is None or normalize_operator(v) not in KEYPAD_OPERATORS:
                raise ValueError(f"Unknown operator {v!r}")
            return normalize_operator(v)
        elif action is Action.APPEND:
            if v is None or len(v) != 1 or v not in EXPRESSION_CHARACTERS:
                raise ValueError(f"Cannot append {v!r} to an expression")
        elif v is not None:
            raise ValueError(f"Action {action.value!r} takes no payload")
        return v


class HistoryEntry(BaseModel):
    """A completed expression evaluation."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Expression as typed")
    result: str = Field(..., description="Formatted result")

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"
