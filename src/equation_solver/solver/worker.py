"""Worker evaluating a single expression into an OperationResult."""
from pydantic import BaseModel, ConfigDict, Field

from equation_solver.common.errors import ErrorKind, EvaluationError
from equation_solver.common.logger import logger
from equation_solver.common.operations import OperationRequest, OperationResult
from equation_solver.common.parser import ExpressionEvaluator


class SolveWorker(BaseModel):
    """
    Worker responsible for evaluating a single expression.

    Lifecycle:
        - Created by the caller for one expression only
        - Evaluates it with ExpressionEvaluator
        - Returns the computed result or the tagged error, never raising for evaluation failures
    """

    # Make the Pydantic instance immutable (read-only) for safety
    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Single expression to evaluate")
    sequence: int = Field(default=1, ge=1, description="Position of the expression in the session")

    @classmethod
    def from_request(cls, request: OperationRequest, sequence: int = 1) -> "SolveWorker":
        """Build a worker from a validated request."""
        return cls(expression=request.expression, sequence=sequence)

    def run(self) -> OperationResult:
        """
        Evaluate the expression and package the outcome.

        :return: Result-carrying or error-carrying outcome
        :rtype: OperationResult
        """
        logger.debug(f"👷🏁 Worker started on #{self.sequence}: {self.expression!r}")

        try:
            result: float = ExpressionEvaluator.evaluate(self.expression)
        except EvaluationError as exc:
            # Internal failures point at a defect, not at the user's input
            log = logger.error if exc.kind is ErrorKind.INTERNAL else logger.info
            log(f"👷❌ Worker failed on #{self.sequence} ({exc.kind.value}): {exc}")
            return OperationResult(
                expression=self.expression,
                error=exc.kind,
                message=str(exc),
            )

        logger.debug(f"👷✅ Worker finished on #{self.sequence}: {result}")
        return OperationResult(expression=self.expression, result=result)
