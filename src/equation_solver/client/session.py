"""Calculator session holding the display and the history of solved equations."""
from typing import List, Optional

from pydantic import BaseModel, Field

from equation_solver.common.errors import ErrorKind
from equation_solver.common.logger import logger
from equation_solver.common.operations import OperationRequest, OperationResult
from equation_solver.common.parser import INVALID_EQUATION, ExpressionEvaluator
from equation_solver.solver.worker import SolveWorker


class HistoryEntry(BaseModel):
    """One solved equation as shown in the history list."""

    expression: str = Field(..., description="Expression as typed by the user")
    result: str = Field(..., description="Text shown on the display after solving")

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"


class CalculatorSession(BaseModel):
    """
    Caller of the solver, standing in for the calculator window.

    The session:
    - keeps the text currently shown on the display
    - solves one expression per "equals" action
    - records solved and invalid equations in its history
    - shows "Error: <message>" for evaluation failures, without recording them
    """

    display: str = Field(default="", description="Text currently shown on the display")
    history: List[HistoryEntry] = Field(default_factory=list, description="Past equations, oldest first")
    max_history: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of history entries kept, unbounded if None"
    )

    @staticmethod
    def render(outcome: OperationResult) -> str:
        """
        Turn an evaluation outcome into display text.

        :param OperationResult outcome: Outcome returned by a SolveWorker

        :return: Formatted result, the invalid-equation sentinel or an error message
        :rtype: str
        """
        if outcome.ok:
            return ExpressionEvaluator.format_result(outcome.result)
        if outcome.error is ErrorKind.INVALID_EXPRESSION:
            return INVALID_EQUATION
        return f"Error: {outcome.message}"

    def equals(self, text: str) -> str:
        """
        Solve the expression and update the display and history.

        :param str text: Expression as typed by the user

        :return: New display text
        :rtype: str
        """
        request = OperationRequest(expression=text)
        outcome: OperationResult = SolveWorker.from_request(
            request, sequence=len(self.history) + 1
        ).run()

        self.display = self.render(outcome)

        if outcome.ok or outcome.error is ErrorKind.INVALID_EXPRESSION:
            self._record(HistoryEntry(expression=text, result=self.display))

        return self.display

    def _record(self, entry: HistoryEntry) -> None:
        self.history.append(entry)
        if self.max_history is not None and len(self.history) > self.max_history:
            dropped = len(self.history) - self.max_history
            del self.history[:dropped]
            logger.debug(f"🗑️ Dropped {dropped} oldest history entries")

    def clear(self) -> None:
        """Empty the display. The history is kept."""
        self.display = ""

    def clear_history(self) -> None:
        """Forget every recorded equation."""
        self.history.clear()

    def history_lines(self) -> List[str]:
        """Return the history rendered as ``"<expression> = <result>"`` lines."""
        return [str(entry) for entry in self.history]
