"""
Domain service: Rolling prediction accuracy.

Pure business logic. No framework imports. No IO.
"""

from datetime import datetime, timedelta
from typing import Iterable

from coinpulse.domain.market.entities import AccuracyReport, PredictionRecord


def compute_accuracy(
    records: Iterable[PredictionRecord],
    window_days: int,
    now: datetime,
) -> AccuracyReport:
    """Score resolved predictions made within the last ``window_days``.

    Only records with an actual outcome count towards the total. A record
    is correct when its signal equals the outcome exactly.

    Args:
        records: Ledger records, any order.
        window_days: Lookback window in days.
        now: Reference time for the window.

    Returns:
        Accuracy in percent (2 decimals), total and correct counts.
        Accuracy is 0 when nothing qualifies.
    """
    since = now - timedelta(days=window_days)
    resolved = [
        r for r in records if r.predicted_at > since and r.actual is not None
    ]
    total = len(resolved)
    correct = sum(1 for r in resolved if r.is_correct)
    accuracy = round(correct / total * 100, 2) if total else 0.0
    return AccuracyReport(accuracy=accuracy, total=total, correct=correct)
