"""Unit tests for SolveWorker."""
import logging

import pytest

from equation_solver.common.errors import ErrorKind
from equation_solver.common.operations import OperationRequest
from equation_solver.solver.worker import SolveWorker


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("2 + 3", 5.0),
        ("10 - 4", 6.0),
        ("3 x 4", 12.0),
        ("8 / 2", 4.0),
        ("-5 + 3", -2.0),
    ],
)
def test_worker_returns_result_for_valid_expression(expr: str, expected: float) -> None:
    """Worker returns the computed result for valid expressions."""
    outcome = SolveWorker(expression=expr, sequence=1).run()

    assert outcome.ok
    assert outcome.expression == expr
    assert outcome.result == expected
    assert outcome.error is None


@pytest.mark.parametrize(
    "expr,kind",
    [
        ("2 +", ErrorKind.INVALID_EXPRESSION),         # Trailing operator
        ("+ 3 4", ErrorKind.INVALID_EXPRESSION),       # Leading operator
        ("1.2.3", ErrorKind.INVALID_EXPRESSION),       # Malformed literal
        ("", ErrorKind.INVALID_EXPRESSION),
        ("5 / 0", ErrorKind.DIVISION_BY_ZERO),
        ("3(2)", ErrorKind.INTERNAL),                  # Extra operand remaining
    ],
)
def test_worker_returns_error_for_failed_expression(expr: str, kind: ErrorKind) -> None:
    """Worker returns a tagged error instead of raising."""
    outcome = SolveWorker(expression=expr, sequence=2).run()

    assert not outcome.ok
    assert outcome.expression == expr
    assert outcome.result is None
    assert outcome.error is kind
    assert isinstance(outcome.message, str) and outcome.message


def test_worker_from_request() -> None:
    """A worker built from a request evaluates the request's expression."""
    worker = SolveWorker.from_request(OperationRequest(expression="1 + 1"), sequence=3)
    assert worker.sequence == 3
    assert worker.run().result == 2.0


def test_worker_rejects_invalid_sequence() -> None:
    """Pydantic validation prevents creating a SolveWorker with a sequence below 1."""
    with pytest.raises(ValueError):
        SolveWorker(expression="1", sequence=0)


def test_worker_logs_internal_failures_as_errors(caplog) -> None:
    """Invariant violations are logged at ERROR level, user mistakes are not."""
    with caplog.at_level(logging.DEBUG, logger="equation_solver"):
        SolveWorker(expression="3++2").run()
        SolveWorker(expression="()").run()

    levels = [record.levelno for record in caplog.records if "failed" in record.getMessage()]
    assert levels == [logging.INFO, logging.ERROR]
