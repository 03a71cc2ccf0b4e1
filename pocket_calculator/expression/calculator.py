"""Expression calculator: a freeform text buffer evaluated by the safe expression parser."""
from typing import List, Optional

from pydantic import BaseModel, Field

from pocket_calculator.common.formatting import format_number, round_significant
from pocket_calculator.common.logger import logger
from pocket_calculator.common.models import Action, ActionRequest, HistoryEntry
from pocket_calculator.common.parser import ExpressionParser

EXPRESSION_ERROR: str = "Error"


class ExpressionCalculator(BaseModel):
    """
    Raw-expression calculator owned by a single display surface.

    Characters are appended without any syntax check; the whole buffer is parsed
    only when it is submitted. Completed evaluations are kept newest first.
    """

    text: str = Field(default="", description="Expression being typed, or the last result")
    history: List[HistoryEntry] = Field(default_factory=list, description="Completed evaluations, newest first")

    @property
    def display(self) -> str:
        """Buffer contents, ``'0'`` when empty."""
        return self.text or "0"

    def handle(self, action: Action, payload: Optional[str] = None) -> str:
        """
        Apply one action and return the new display string.

        ``digit``, ``decimal``, ``operator`` and ``append`` all append a character.

        :param Action action: Action to perform
        :param str payload: Character to append, if any

        :return: Display string after the action
        :rtype: str
        :raises ValueError: If the payload is invalid or the action is not supported
        """
        if action is Action.DECIMAL:
            action, payload = Action.APPEND, "."
        request = ActionRequest(action=action, payload=payload)

        if request.action in (Action.DIGIT, Action.OPERATOR, Action.APPEND):
            if request.payload == "%":
                raise ValueError("Expression calculator has no percent operator")
            self.append(request.payload)
        elif request.action is Action.CALCULATE:
            self.submit()
        elif request.action is Action.BACKSPACE:
            self.backspace()
        elif request.action is Action.CLEAR:
            self.clear()
        else:
            raise ValueError(f"Expression calculator does not support action {request.action.value!r}")

        return self.display

    def append(self, char: str) -> None:
        self.text += char

    def backspace(self) -> None:
        self.text = self.text[:-1]

    def clear(self) -> None:
        self.text = ""

    def submit(self) -> bool:
        """
        Evaluate the buffer and replace it with the result.

        On failure the buffer becomes ``"Error"`` and history is left untouched.

        :return: True if the expression was evaluated
        :rtype: bool
        """
        expression = self.text
        try:
            value = ExpressionParser.evaluate(expression)
        except (ValueError, ZeroDivisionError) as exc:
            logger.warning(f"🧾❌ Could not evaluate {expression!r}: {exc}")
            self.text = EXPRESSION_ERROR
            return False

        result = format_number(round_significant(value))
        self.history.insert(0, HistoryEntry(expression=expression, result=result))
        self.text = result
        logger.debug(f"🧾✅ {expression} = {result}")
        return True
