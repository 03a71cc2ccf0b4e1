"""Parse and evaluate arithmetic expressions safely."""
from collections.abc import Callable as ABCCallable
import operator
import re
from typing import Callable, List, Tuple


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

# Mapping of binary operator symbols to (precedence, function)
OPERATORS: dict[str, Tuple[int, OperatorFn]] = {
    "+": (1, operator.add),
    "-": (1, operator.sub),
    "*": (2, operator.mul),
    "/": (2, operator.truediv),
}

# Prefix operators, bound tighter than any binary operator
UNARY_OPERATORS: dict[str, Tuple[int, Callable[[float], float]]] = {
    "u-": (3, operator.neg),
    "u+": (3, operator.pos),
}

# Numbers ("12", "1.5", "5.", ".5", "1e-7"), operators, parentheses, or any other single character
TOKEN_PATTERN = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?|[-+*/()]|\S")


class ExpressionParser:
    """
    Parse and evaluate arithmetic expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Only numeric literals, + - * /, unary sign and parentheses

    Algorithm:
        1. Tokenize with a regular expression (whitespace is optional)
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack

    Examples:
        - Infix expression (standard notation): (3 + 4) * -2
        - Corresponding Reverse Polish Notation (RPN): 3 4 + 2 u- *
    """

    @staticmethod
    def tokenize(expr: str) -> List[str]:
        """
        Split an arithmetic expression into tokens.

        :param str expr: Arithmetic expression as a string

        :return: List of tokens
        :rtype: List[str]
        :raises ValueError: If the expression contains an unsupported character
        """
        tokens: List[str] = TOKEN_PATTERN.findall(expr)
        for token in tokens:
            if not ExpressionParser._is_number(token) and token not in "+-*/()":
                raise ValueError(f"Unsupported character {token!r} in expression: {expr}")
        return tokens

    @staticmethod
    def _is_number(token: str) -> bool:
        """
        Determine if a token represents a numeric value.

        :param str token: Token string

        :return: True if token can be converted to float, else False
        :rtype: bool
        """
        try:
            float(token)
            return True
        except ValueError:
            return False

    @staticmethod
    def to_rpn(tokens: List[str]) -> List[str]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

        A ``+`` or ``-`` found where an operand is expected is emitted as the prefix
        operator ``u+`` or ``u-``.

        :param List[str] tokens: List of arithmetic tokens

        :return: List of tokens in RPN order
        :rtype: List[str]
        :raises ValueError: If parentheses are unbalanced or misplaced
        """
        output: List[str] = []
        stack: List[str] = []
        expect_operand = True

        for token in tokens:
            if ExpressionParser._is_number(token):
                output.append(token)
                expect_operand = False
            elif token == "(":
                if not expect_operand:
                    raise ValueError("Missing operator before '('")
                stack.append(token)
            elif token == ")":
                if expect_operand:
                    raise ValueError("Missing operand before ')'")
                while stack and stack[-1] != "(":
                    output.append(stack.pop())
                if not stack:
                    raise ValueError("Unbalanced parentheses")
                stack.pop()
            elif expect_operand and token in "+-":
                # Prefix operators never pop anything off the stack
                stack.append(f"u{token}")
            else:
                # Binary operator: pop operators from stack with higher or equal precedence
                prec = OPERATORS[token][0]
                while stack and stack[-1] != "(" and ExpressionParser._precedence(stack[-1]) >= prec:
                    output.append(stack.pop())
                stack.append(token)
                expect_operand = True

        if "(" in stack:
            raise ValueError("Unbalanced parentheses")

        # Append remaining operators in reverse order (stack top first)
        output.extend(stack[::-1])
        return output

    @staticmethod
    def _precedence(token: str) -> int:
        if token in UNARY_OPERATORS:
            return UNARY_OPERATORS[token][0]
        return OPERATORS[token][0]

    @staticmethod
    def evaluate(expr: str) -> float:
        """
        Evaluate an arithmetic expression safely.

        :param str expr: Arithmetic expression string

        :return: Computed result as float
        :rtype: float
        :raises ValueError: If expression is invalid or malformed
        :raises ZeroDivisionError: If the expression divides by zero
        """
        tokens: List[str] = ExpressionParser.tokenize(expr)

        if not tokens:
            raise ValueError("Empty expression")

        rpn: List[str] = ExpressionParser.to_rpn(tokens)

        stack: List[float] = []
        for token in rpn:
            if ExpressionParser._is_number(token):
                stack.append(float(token))
            elif token in UNARY_OPERATORS:
                if not stack:
                    raise ValueError(f"Invalid expression (dangling sign): {expr}")
                stack.append(UNARY_OPERATORS[token][1](stack.pop()))
            else:
                # Binary operator requires two operands
                if len(stack) < 2:
                    raise ValueError(f"Invalid expression (not enough operands): {expr}")
                b: float = stack.pop()
                a: float = stack.pop()
                stack.append(OPERATORS[token][1](a, b))

        if len(stack) != 1:
            raise ValueError(f"Invalid expression (remaining operands): {expr}")

        return stack[0]
