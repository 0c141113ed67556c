"""
Domain service: Portfolio valuation and threshold alerts.

Keeps the process-wide valuation baseline that every broadcast tick is
compared against. The baseline is shared by all subscribers: each tick
overwrites it, whichever connection produced the tick.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from coinpulse.domain.market.entities import PortfolioValuation, QuoteSnapshot

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def value_snapshot(snapshot: QuoteSnapshot) -> PortfolioValuation:
    """Sum every quote in the snapshot."""
    return PortfolioValuation(value=snapshot.total())


def percentage_change(new: Decimal, old: Optional[Decimal]) -> Decimal:
    """Return the change from ``old`` to ``new`` in percent.

    No baseline, or a zero baseline, yields 0.
    """
    if old is None or old == ZERO:
        return ZERO
    return (new - old) / old * HUNDRED


@dataclass(frozen=True)
class ValuationChange:
    """Outcome of comparing a valuation against the baseline."""

    valuation: PortfolioValuation
    change_percent: Decimal
    should_notify: bool

    @property
    def notification_text(self) -> str:
        return (
            f"Portfolio value changed by {self.change_percent:.2f}% "
            f"to ${self.valuation.value:.2f}."
        )


class ValuationMonitor:
    """Holds the shared previous valuation and detects large moves.

    ``observe`` compares and overwrites in one synchronous step, so on a
    single event loop no other tick can run between the two.
    """

    def __init__(self, threshold_percent: Decimal = Decimal("5")) -> None:
        self._threshold = Decimal(str(threshold_percent))
        self._previous: Optional[PortfolioValuation] = None

    @property
    def previous(self) -> Optional[PortfolioValuation]:
        return self._previous

    @property
    def threshold_percent(self) -> Decimal:
        return self._threshold

    def observe(self, valuation: PortfolioValuation) -> ValuationChange:
        """Compare against the baseline, then make ``valuation`` the new baseline."""
        old = self._previous.value if self._previous is not None else None
        change = percentage_change(valuation.value, old)
        self._previous = valuation

        should_notify = abs(change) >= self._threshold
        if should_notify:
            logger.info(
                "Valuation moved %.2f%% (%s -> %s)", change, old, valuation.value
            )
        return ValuationChange(
            valuation=valuation,
            change_percent=change,
            should_notify=should_notify,
        )
