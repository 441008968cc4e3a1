"""Pydantic models for calculator requests and their outcomes."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from equation_solver.common.errors import ErrorKind


class OperationRequest(BaseModel):
    """Represents a single expression submitted to the solver."""

    model_config = ConfigDict(strict=True)

    expression: str = Field(..., description="Expression as typed by the user")


class OperationResult(BaseModel):
    """
    Outcome of an evaluation: either a numeric result or a tagged error.

    Exactly one of ``result`` and ``error`` is set, so callers branch on
    ``error`` instead of catching exceptions.
    """

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Original expression")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    error: Optional[ErrorKind] = Field(default=None, description="Kind of failure, if any")
    message: Optional[str] = Field(default=None, description="Human-readable failure message")

    @model_validator(mode="after")
    def result_xor_error(self) -> "OperationResult":
        """Ensure the outcome carries a result or an error, never both."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' and 'error' must be set")
        return self

    @property
    def ok(self) -> bool:
        """True if the evaluation produced a result."""
        return self.error is None
