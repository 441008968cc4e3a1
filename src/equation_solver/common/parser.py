"""Validate and evaluate calculator expressions safely."""
from collections.abc import Callable as ABCCallable
import math
import operator
import string
from typing import Callable, List, Tuple

from equation_solver.common.errors import (
    DivisionByZeroError,
    InvalidExpressionError,
    InvariantViolationError,
)


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

# Mapping of operator symbols to (precedence, function)
OPERATORS: dict[str, Tuple[int, OperatorFn]] = {
    "+": (1, operator.add),
    "-": (1, operator.sub),
    "x": (2, operator.mul),
    "/": (2, operator.truediv),
}

OPEN_BRACKET = "("
CLOSE_BRACKET = ")"
DIGITS = frozenset(string.digits)
NUMBER_CHARS = DIGITS | {"."}

# Sentinel returned by solve() for structurally invalid input
INVALID_EQUATION = "Invalid equation"

# Integral results below this magnitude are printed without a fractional part
_INTEGRAL_DISPLAY_LIMIT = 1e16


class ExpressionEvaluator:
    """
    Validate and evaluate calculator expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Validation always runs before any stack is touched
        - No state survives a call, so one evaluator can serve any number of threads

    Algorithm:
        1. Remove every space character
        2. Check the structure of the expression in a single scan
        3. Evaluate in a single left-to-right pass with the Shunting-yard technique,
           using an operand stack and an operator stack

    Multiplication is written ``x``. A ``-`` is read as a sign only when it opens the
    expression and is followed by a digit or a decimal point.

    Examples:
        - ``3 + (2 x 4)`` evaluates to ``11``
        - ``8 / 2 / 2`` evaluates to ``2`` (operators of equal rank group left to right)
    """

    @staticmethod
    def normalize(raw: str) -> str:
        """
        Remove every space character from an expression.

        Other whitespace (tabs, newlines) is left in place and rejected by validation.

        :param str raw: Expression as typed by the user

        :return: Expression without spaces
        :rtype: str
        """
        return raw.replace(" ", "")

    @staticmethod
    def _starts_negative_literal(equation: str, index: int) -> bool:
        """Whether a ``-`` at ``index`` is the sign of a literal opening the expression."""
        return (
            index == 0
            and equation[:1] == "-"
            and len(equation) > 1
            and equation[1] in NUMBER_CHARS
        )

    @staticmethod
    def is_valid(equation: str) -> bool:
        """
        Check the structure of a normalized expression.

        Rejects unbalanced or premature brackets, consecutive operators, leading or
        trailing operators, empty input and any character outside the grammar.
        The shape of numeric literals is not checked here.

        :param str equation: Normalized expression

        :return: True if the expression may be evaluated
        :rtype: bool
        """
        open_count: int = 0
        close_count: int = 0
        expect_operand: bool = True

        for index, char in enumerate(equation):
            if char in NUMBER_CHARS:
                expect_operand = False
            elif ExpressionEvaluator._starts_negative_literal(equation, index):
                continue
            elif char in OPERATORS:
                if expect_operand:
                    return False
                expect_operand = True
            elif char == OPEN_BRACKET:
                open_count += 1
            elif char == CLOSE_BRACKET:
                close_count += 1
                if close_count > open_count:
                    return False
                expect_operand = False
            else:
                return False

        return open_count == close_count and not expect_operand

    @staticmethod
    def tokenize(equation: str) -> List[str]:
        """
        Split a normalized expression into number, operator and bracket tokens.

        :param str equation: Normalized expression

        :return: List of tokens
        :rtype: List[str]
        """
        tokens: List[str] = []
        i: int = 0

        while i < len(equation):
            char = equation[i]
            if char in NUMBER_CHARS or ExpressionEvaluator._starts_negative_literal(equation, i):
                start = i
                # The sign is part of the literal
                i += 1
                while i < len(equation) and equation[i] in NUMBER_CHARS:
                    i += 1
                tokens.append(equation[start:i])
            else:
                tokens.append(char)
                i += 1

        return tokens

    @staticmethod
    def _parse_number(token: str) -> float:
        """
        Convert a number token to a float.

        :param str token: Number token, e.g. ``"4.5"`` or ``"-5"``

        :return: Parsed value
        :rtype: float
        :raises InvalidExpressionError: If the literal is malformed (e.g. ``"1.2.3"``)
        """
        try:
            return float(token)
        except ValueError as exc:
            raise InvalidExpressionError(f"Malformed number: {token!r}") from exc

    @staticmethod
    def has_precedence(incoming: str, top: str) -> bool:
        """
        Tell whether the stacked operator must be reduced before pushing another one.

        Brackets are never reduced by precedence. Operators of equal rank are
        reduced, which makes all four operators left-associative.

        :param str incoming: Operator about to be pushed
        :param str top: Operator currently on top of the operator stack

        :return: True if ``top`` must be reduced first
        :rtype: bool
        """
        if top not in OPERATORS:
            return False
        return OPERATORS[top][0] >= OPERATORS[incoming][0]

    @staticmethod
    def perform(op: str, operand1: float, operand2: float) -> float:
        """
        Apply a binary operator.

        :param str op: One of ``+ - x /``
        :param float operand1: Left operand
        :param float operand2: Right operand

        :return: ``operand1 op operand2``
        :rtype: float
        :raises DivisionByZeroError: If ``op`` is ``/`` and ``operand2`` is zero
        :raises InvariantViolationError: If ``op`` is not a known operator
        """
        if op not in OPERATORS:
            raise InvariantViolationError(f"Unknown operator: {op!r}")
        if op == "/" and operand2 == 0:
            raise DivisionByZeroError()
        return OPERATORS[op][1](operand1, operand2)

    @staticmethod
    def _reduce(operands: List[float], operators: List[str]) -> None:
        """Pop two operands and one operator, and push the result back."""
        if len(operands) < 2:
            raise InvariantViolationError("Not enough operands to reduce")
        operand2: float = operands.pop()
        operand1: float = operands.pop()
        op: str = operators.pop()
        operands.append(ExpressionEvaluator.perform(op, operand1, operand2))

    @staticmethod
    def evaluate(raw: str) -> float:
        """
        Validate and evaluate an expression.

        :param str raw: Expression as typed by the user

        :return: Computed result
        :rtype: float
        :raises InvalidExpressionError: If the expression is malformed
        :raises DivisionByZeroError: If a division by zero occurs
        :raises InvariantViolationError: If the validator let through a shape that does not evaluate
        """
        equation: str = ExpressionEvaluator.normalize(raw)

        if not ExpressionEvaluator.is_valid(equation):
            raise InvalidExpressionError(f"Invalid equation: {raw!r}")

        operands: List[float] = []
        operators: List[str] = []

        for token in ExpressionEvaluator.tokenize(equation):
            if token in OPERATORS:
                while operators and ExpressionEvaluator.has_precedence(token, operators[-1]):
                    ExpressionEvaluator._reduce(operands, operators)
                operators.append(token)
            elif token == OPEN_BRACKET:
                operators.append(token)
            elif token == CLOSE_BRACKET:
                while operators and operators[-1] != OPEN_BRACKET:
                    ExpressionEvaluator._reduce(operands, operators)
                if not operators:
                    raise InvalidExpressionError(f"Mismatched closing bracket: {raw!r}")
                operators.pop()
            elif token[-1] in NUMBER_CHARS:
                operands.append(ExpressionEvaluator._parse_number(token))
            else:
                raise InvariantViolationError(f"Unexpected token: {token!r}")

        # Drain remaining operators
        while operators:
            if operators[-1] == OPEN_BRACKET:
                raise InvariantViolationError(f"Unclosed bracket survived validation: {raw!r}")
            ExpressionEvaluator._reduce(operands, operators)

        if len(operands) != 1:
            raise InvariantViolationError(
                f"Expected a single result, found {len(operands)} operands: {raw!r}"
            )

        return operands[0]

    @staticmethod
    def format_result(value: float) -> str:
        """
        Format a result as the shortest decimal text that reads back to the same float.

        Integral values are printed without a fractional part.

        :param float value: Evaluated result

        :return: Display text, e.g. ``"11"``, ``"0.1"`` or ``"inf"``
        :rtype: str
        """
        if math.isfinite(value) and value.is_integer() and abs(value) < _INTEGRAL_DISPLAY_LIMIT:
            return str(int(value))
        return repr(value)

    @staticmethod
    def solve(equation: str) -> str:
        """
        Evaluate an expression and return the formatted result.

        :param str equation: Expression as typed by the user

        :return: Formatted result, or ``"Invalid equation"`` for malformed input
        :rtype: str
        :raises DivisionByZeroError: If a division by zero occurs
        :raises InvariantViolationError: If the expression reaches an impossible state
        """
        try:
            value: float = ExpressionEvaluator.evaluate(equation)
        except InvalidExpressionError:
            return INVALID_EQUATION
        return ExpressionEvaluator.format_result(value)
