"""
Use case: Report prediction accuracy and the full ledger.

Input: GetAccuracyQuery (window_days)
Output: (AccuracyReport, list[PredictionRecord])
Side effects: None (read-only query).
Failure cases: None.
"""

import logging

from coinpulse.application.market.dtos import GetAccuracyQuery
from coinpulse.domain.market.entities import AccuracyReport, PredictionRecord
from coinpulse.domain.market.ports import PredictionLedger

logger = logging.getLogger(__name__)


class GetAccuracyUseCase:
    """Read-only roll-up over the prediction ledger."""

    def __init__(self, ledger: PredictionLedger) -> None:
        self._ledger = ledger

    def execute(
        self, query: GetAccuracyQuery
    ) -> tuple[AccuracyReport, list[PredictionRecord]]:
        report = self._ledger.accuracy(query.window_days)
        logger.debug(
            "Accuracy over %d days: %s%% (%d/%d)",
            query.window_days,
            report.accuracy,
            report.correct,
            report.total,
        )
        return report, self._ledger.history()
