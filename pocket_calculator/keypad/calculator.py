"""Keypad calculator: explicit operand/operator state driven by discrete button actions."""
import math
from typing import Optional, Union

from pydantic import BaseModel, Field

from pocket_calculator.common.formatting import (
    display_symbol,
    format_number,
    parse_operand,
    round_significant,
)
from pocket_calculator.common.logger import logger
from pocket_calculator.common.models import Action, ActionRequest
from pocket_calculator.common.parser import OPERATORS

DIVISION_BY_ZERO: str = "Error: Div by 0"

Operand = Union[float, str]


class KeypadCalculator(BaseModel):
    """
    Token-state calculator owned by a single display surface.

    States:
        - Initial: no previous operand, no operator
        - OperatorPending: operator chosen, waiting for the first digit of the second operand
        - TypingSecondOperand: digits of the second operand being entered

    Invariants:
        - ``waiting_for_second_operand`` implies ``operator`` is set and ``previous_input`` is not ``''``
        - ``operator is None`` implies ``previous_input == ''``
    """

    current_input: str = Field(default="0", description="Operand being typed, or the last result")
    previous_input: Operand = Field(default="", description="First operand of the pending operation, '' if none")
    operator: Optional[str] = Field(default=None, description="Pending operator (+, -, *, /, %)")
    waiting_for_second_operand: bool = Field(default=False, description="Operator chosen, no second operand digit yet")

    @property
    def display(self) -> str:
        """
        Render the display string for the current state.

        :return: ``"<current>"``, ``"<previous> <op>"`` or ``"<previous> <op> <current>"``
        :rtype: str
        """
        if self.operator is None and self.previous_input == "":
            return self._render_current()
        previous = self._render_operand(self.previous_input)
        symbol = display_symbol(self.operator)
        if self.waiting_for_second_operand:
            return f"{previous} {symbol}"
        return f"{previous} {symbol} {self._render_current()}"

    def _render_current(self) -> str:
        value = parse_operand(self.current_input)
        if math.isnan(value):
            # The input holds an error message, shown as is
            return self.current_input
        return format_number(value)

    @staticmethod
    def _render_operand(value: Operand) -> str:
        if isinstance(value, str):
            return value
        return format_number(value)

    def handle(self, action: Action, payload: Optional[str] = None) -> str:
        """
        Apply one action and return the new display string.

        :param Action action: Action to perform
        :param str payload: Digit for ``digit``, operator symbol for ``operator``

        :return: Display string after the action
        :rtype: str
        :raises ValueError: If the payload is invalid or the action is not a keypad action
        """
        request = ActionRequest(action=action, payload=payload)

        if request.action is Action.DIGIT:
            self.input_digit(request.payload)
        elif request.action is Action.DECIMAL:
            self.input_decimal()
        elif request.action is Action.OPERATOR:
            self.handle_operator(request.payload)
        elif request.action is Action.PERCENT:
            self.percent()
        elif request.action is Action.CALCULATE:
            self.calculate_result()
        elif request.action is Action.BACKSPACE:
            self.backspace()
        elif request.action is Action.CLEAR:
            self.clear_all()
        else:
            raise ValueError(f"Keypad calculator does not support action {request.action.value!r}")

        logger.debug(f"🧮 {request.action.value}({request.payload or ''}) -> {self.display!r}")
        return self.display

    def input_digit(self, digit: str) -> None:
        """Append a digit to the current operand, or start the second operand."""
        if self.waiting_for_second_operand:
            self.current_input = digit
            self.waiting_for_second_operand = False
        elif self.current_input == "0":
            self.current_input = digit
        else:
            self.current_input += digit

    def input_decimal(self) -> None:
        """Add a decimal point unless the operand already has one."""
        if self.waiting_for_second_operand:
            self.current_input = "0."
            self.waiting_for_second_operand = False
            return
        if "." not in self.current_input:
            self.current_input += "."

    def clear_all(self) -> None:
        """Reset to the initial state."""
        self.current_input = "0"
        self.previous_input = ""
        self.operator = None
        self.waiting_for_second_operand = False

    def backspace(self) -> None:
        """
        Remove the last typed character.

        Right after an operator, the operand is reset to ``'0'``; the operator stays.
        """
        if self.waiting_for_second_operand:
            self.current_input = "0"
            self.waiting_for_second_operand = False
        elif len(self.current_input) > 1 and self.current_input[:-1] != "-":
            self.current_input = self.current_input[:-1]
        else:
            self.current_input = "0"

    def handle_operator(self, next_operator: str) -> None:
        """
        Store an operator, computing any pending operation first.

        Pressing a second operator before typing a digit only replaces the pending operator.

        :param str next_operator: Internal operator symbol (+, -, *, /, %)
        """
        if self.operator is not None and self.waiting_for_second_operand:
            self.operator = next_operator
            return

        input_value = parse_operand(self.current_input)

        if self.previous_input == "":
            self.previous_input = input_value
        elif self.operator is not None:
            # Chaining: the result becomes the first operand of the next operation
            result = self.operate(self.previous_input, input_value, self.operator)
            self.current_input = self._render_operand(result)
            self.previous_input = result

        self.operator = next_operator
        self.waiting_for_second_operand = True

    def calculate_result(self) -> None:
        """Complete the pending operation and return to the initial state."""
        if self.operator is None or self.previous_input == "":
            return

        result = self.operate(self.previous_input, parse_operand(self.current_input), self.operator)
        self.current_input = self._render_operand(result)
        self.previous_input = ""
        self.operator = None
        self.waiting_for_second_operand = False

    def percent(self) -> None:
        """
        Apply the percent key.

        With a pending ``A + B`` or ``A - B`` the percentage is taken of ``A``, so
        ``200 + 10 %`` gives ``220``. For the other operators the operation is computed
        and then scaled by ``B / 100``, so ``200 ÷ 10 %`` gives ``2``.
        Without a pending operation, the current operand is divided by 100.
        """
        input_value = parse_operand(self.current_input)

        if self.operator is not None and self.previous_input != "":
            if isinstance(self.previous_input, str):
                result: Operand = self.previous_input
            elif self.operator in ("+", "-"):
                share = self.previous_input * (input_value / 100)
                result = self.operate(self.previous_input, share, self.operator)
            else:
                result = self.operate(self.previous_input, input_value, self.operator)
                if not isinstance(result, str):
                    result = round_significant(result * (input_value / 100))
            self.current_input = self._render_operand(result)
            self.previous_input = ""
            self.operator = None
            self.waiting_for_second_operand = False
        else:
            self.current_input = format_number(round_significant(input_value / 100))

    def operate(self, a: Operand, b: float, op: str) -> Operand:
        """
        Perform a single arithmetic operation.

        :param a: First operand, or an error message from an earlier step
        :param float b: Second operand
        :param str op: Internal operator symbol

        :return: Result rounded to 12 significant digits, or an error message
        :rtype: Union[float, str]
        """
        if isinstance(a, str):
            # An earlier error propagates until the calculator is cleared
            return a

        if op == "/" and b == 0:
            logger.warning(f"➗❌ Division by zero: {format_number(a)} / 0")
            return DIVISION_BY_ZERO

        if op == "%":
            result = a / 100 if self.previous_input == "" else a * (b / 100)
        elif op in OPERATORS:
            result = OPERATORS[op][1](a, b)
        else:
            # Unknown operator keeps the second operand
            return b

        return round_significant(result)
