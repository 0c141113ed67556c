"""
Use case: Annotate a prediction with its actual outcome.

Input: RecordOutcomeCommand (prediction_id, actual)
Output: the updated PredictionRecord
Side effects: Overwrites ``actual`` on the record (last write wins).
Failure cases: PredictionNotFoundError.
"""

import logging

from coinpulse.application.market.dtos import RecordOutcomeCommand
from coinpulse.domain.market.entities import PredictionRecord
from coinpulse.domain.market.errors import PredictionNotFoundError
from coinpulse.domain.market.ports import PredictionLedger

logger = logging.getLogger(__name__)


class RecordOutcomeUseCase:
    """Sets the actual outcome of a ledger record."""

    def __init__(self, ledger: PredictionLedger) -> None:
        self._ledger = ledger

    def execute(self, command: RecordOutcomeCommand) -> PredictionRecord:
        """Run the outcome annotation.

        Raises:
            PredictionNotFoundError: If the id is missing or unknown.
        """
        if command.prediction_id is None:
            raise PredictionNotFoundError(None)
        return self._ledger.record_outcome(command.prediction_id, command.actual)
