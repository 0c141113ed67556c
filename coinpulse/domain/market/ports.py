"""
Port interfaces (ABCs) for the market bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from coinpulse.domain.market.entities import (
    AccuracyReport,
    PricePoint,
    PredictionRecord,
    QuoteSnapshot,
)


class PriceQuoteProvider(ABC):
    """Port for the external price-quote service."""

    @abstractmethod
    async def get_quotes(self, symbols: list[str]) -> QuoteSnapshot:
        """Return the current price of every requested symbol.

        Symbols the provider does not know are omitted from the snapshot.

        Raises:
            ProviderError: If the call fails or returns a non-success status.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_price_history(self, symbol: str, days: int) -> list[PricePoint]:
        """Return the price series for a symbol over the last ``days`` days.

        Raises:
            ProviderError: If the call fails or returns a non-success status.
        """
        raise NotImplementedError


class PredictionLedger(ABC):
    """Port for the append-only prediction store."""

    @abstractmethod
    def append(self, record: PredictionRecord) -> int:
        """Assign the next id to the record, store it and return the id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, prediction_id: int) -> Optional[PredictionRecord]:
        """Return the record with the given id, or None."""
        raise NotImplementedError

    @abstractmethod
    def record_outcome(self, prediction_id: int, actual: Optional[str]) -> PredictionRecord:
        """Set the actual outcome of a record and return it.

        Raises:
            PredictionNotFoundError: If no record has that id.
        """
        raise NotImplementedError

    @abstractmethod
    def accuracy(
        self, window_days: int, now: Optional[datetime] = None
    ) -> AccuracyReport:
        """Return the accuracy of resolved predictions inside the window."""
        raise NotImplementedError

    @abstractmethod
    def history(self) -> list[PredictionRecord]:
        """Return every record in id order."""
        raise NotImplementedError
