"""
Data Transfer Objects for the market application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class GetMarketDataQuery:
    """Input DTO for a single-coin spot price lookup.

    Attributes:
        symbol: Provider coin id, e.g. ``bitcoin``.
    """

    symbol: str


@dataclass(frozen=True)
class GeneratePredictionCommand:
    """Input DTO for generating and recording a prediction.

    Attributes:
        symbol: Provider coin id whose history is analysed.
    """

    symbol: str


@dataclass(frozen=True)
class RecordOutcomeCommand:
    """Input DTO for annotating a prediction with its actual outcome.

    Attributes:
        prediction_id: Ledger id, or None when the request carried no usable id.
        actual: Observed outcome, compared verbatim with the signal.
    """

    prediction_id: Optional[int]
    actual: Optional[str]


@dataclass(frozen=True)
class GetAccuracyQuery:
    """Input DTO for the accuracy roll-up.

    Attributes:
        window_days: Lookback window in days.
    """

    window_days: int


@dataclass(frozen=True)
class GetPortfolioQuery:
    """Input DTO for an uncached portfolio valuation.

    Attributes:
        symbols: Provider coin ids held in the portfolio.
    """

    symbols: tuple[str, ...]


@dataclass(frozen=True)
class PortfolioResult:
    """Output DTO for a portfolio valuation.

    Attributes:
        prices: Raw price map in the provider's shape.
        portfolio_value: Sum of prices over the requested symbols.
    """

    prices: dict[str, dict[str, float]]
    portfolio_value: Decimal
