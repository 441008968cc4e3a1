"""Exceptions raised while validating and evaluating an expression."""
from enum import Enum


class ErrorKind(str, Enum):
    """Tag identifying which kind of failure an evaluation ended with."""

    INVALID_EXPRESSION = "invalid_expression"
    DIVISION_BY_ZERO = "division_by_zero"
    INTERNAL = "internal"


class EvaluationError(Exception):
    """Base class for every failure the evaluator can report."""

    kind: ErrorKind = ErrorKind.INTERNAL


class InvalidExpressionError(EvaluationError):
    """The expression is structurally malformed and was not evaluated."""

    kind = ErrorKind.INVALID_EXPRESSION


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    """A reduction tried to divide by an operand equal to zero."""

    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, message: str = "Attempted to divide by zero.") -> None:
        super().__init__(message)


class InvariantViolationError(EvaluationError, AssertionError):
    """
    The evaluator reached a state that validation should have ruled out.

    This signals a defect rather than bad user input.
    """

    kind = ErrorKind.INTERNAL
