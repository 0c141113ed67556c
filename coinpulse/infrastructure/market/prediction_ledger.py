"""
Adapter: In-memory prediction ledger.

Implements the PredictionLedger port with a plain list.
State lives for the lifetime of the process and is lost on restart.
"""

import logging
import threading
from datetime import datetime
from typing import Optional

from coinpulse.domain.market.accuracy import compute_accuracy
from coinpulse.domain.market.entities import (
    AccuracyReport,
    PredictionRecord,
    utcnow,
)
from coinpulse.domain.market.errors import PredictionNotFoundError
from coinpulse.domain.market.ports import PredictionLedger

logger = logging.getLogger(__name__)


class InMemoryPredictionLedger(PredictionLedger):
    """Append-only list of predictions, indexed by 1-based id.

    Synchronous routes run in the server's worker threads, so every
    access goes through a lock.
    """

    def __init__(self) -> None:
        self._records: list[PredictionRecord] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def append(self, record: PredictionRecord) -> int:
        with self._lock:
            record.id = len(self._records) + 1
            self._records.append(record)
        logger.info(
            "Recorded prediction id=%d symbol=%s signal=%s",
            record.id,
            record.symbol,
            record.signal.value,
        )
        return record.id

    def get(self, prediction_id: int) -> Optional[PredictionRecord]:
        # ids are positions + 1; records are never removed
        if prediction_id < 1:
            return None
        with self._lock:
            if prediction_id > len(self._records):
                return None
            return self._records[prediction_id - 1]

    def record_outcome(
        self, prediction_id: int, actual: Optional[str]
    ) -> PredictionRecord:
        record = self.get(prediction_id)
        if record is None:
            raise PredictionNotFoundError(prediction_id)
        with self._lock:
            record.actual = actual
        logger.info("Prediction id=%d resolved as %s", prediction_id, actual)
        return record

    def accuracy(
        self, window_days: int, now: Optional[datetime] = None
    ) -> AccuracyReport:
        return compute_accuracy(self.history(), window_days, now or utcnow())

    def history(self) -> list[PredictionRecord]:
        with self._lock:
            return list(self._records)
