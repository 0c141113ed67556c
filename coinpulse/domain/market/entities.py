"""
Domain entities for the market bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Signal(Enum):
    """Trend-following recommendation derived from two moving averages."""

    BUY = "Buy"
    SELL = "Sell"
    HOLD = "Hold"


@dataclass(frozen=True)
class PriceQuote:
    """The latest spot price of a single coin in the quote currency."""

    symbol: str
    price: Decimal
    fetched_at: datetime


@dataclass(frozen=True)
class PricePoint:
    """One sample of a historical price series."""

    timestamp: datetime
    price: Decimal

    @property
    def date_label(self) -> str:
        """Calendar date of the sample, ISO formatted."""
        return self.timestamp.date().isoformat()


@dataclass(frozen=True)
class QuoteSnapshot:
    """All quotes returned by a single provider call.

    Snapshots are replaced wholesale on refresh and never mutated.
    """

    quotes: dict[str, PriceQuote]
    vs_currency: str
    fetched_at: datetime

    @property
    def symbols(self) -> list[str]:
        return list(self.quotes)

    def total(self, symbols: Optional[list[str]] = None) -> Decimal:
        """Sum the quoted prices; symbols without a quote count as zero."""
        wanted = self.symbols if symbols is None else symbols
        return sum(
            (self.quotes[s].price for s in wanted if s in self.quotes),
            Decimal("0"),
        )

    def to_payload(self) -> dict[str, dict[str, float]]:
        """Render in the provider's wire shape: ``{symbol: {currency: price}}``."""
        return {
            symbol: {self.vs_currency: float(quote.price)}
            for symbol, quote in self.quotes.items()
        }


@dataclass(frozen=True)
class PortfolioValuation:
    """Sum of current prices across a symbol set at a point in time."""

    value: Decimal
    computed_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class MovingAverageSignal:
    """Output of the moving-average predictor."""

    short_ma: Decimal
    long_ma: Decimal
    signal: Signal
    rationale: str


@dataclass
class PredictionRecord:
    """A generated prediction and, once known, its actual outcome.

    Everything except ``actual`` is fixed at creation. ``id`` is
    assigned by the ledger on append.
    """

    symbol: str
    signal: Signal
    rationale: str
    short_ma: Decimal
    long_ma: Decimal
    prices: list[Decimal]
    labels: list[str]
    predicted_at: datetime = field(default_factory=utcnow)
    actual: Optional[str] = None
    id: int = 0

    @property
    def is_correct(self) -> bool:
        return self.actual is not None and self.signal.value == self.actual


@dataclass(frozen=True)
class AccuracyReport:
    """Share of resolved predictions whose signal matched the outcome."""

    accuracy: float
    total: int
    correct: int
