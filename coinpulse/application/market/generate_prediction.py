"""
Use case: Generate a moving-average prediction and record it.

Input: GeneratePredictionCommand (symbol)
Output: PredictionRecord (with its ledger id)
Side effects: Appends one record to the prediction ledger.
Failure cases: ProviderError (history fetch failed). Nothing is appended then.
"""

import logging

from coinpulse.application.market.dtos import GeneratePredictionCommand
from coinpulse.domain.market.entities import PredictionRecord, utcnow
from coinpulse.domain.market.moving_average import predict_signal
from coinpulse.domain.market.ports import PredictionLedger, PriceQuoteProvider

logger = logging.getLogger(__name__)


class GeneratePredictionUseCase:
    """Orchestrates history fetch, signal computation and ledger append.

    The predictor itself is a pure function; this use case only wires
    the provider's series into it and stores the outcome.
    """

    def __init__(
        self,
        provider: PriceQuoteProvider,
        ledger: PredictionLedger,
        history_days: int = 10,
        short_window: int = 5,
        long_window: int = 10,
    ) -> None:
        self._provider = provider
        self._ledger = ledger
        self._history_days = history_days
        self._short_window = short_window
        self._long_window = long_window

    async def execute(self, command: GeneratePredictionCommand) -> PredictionRecord:
        """Run the prediction use case.

        Args:
            command: The coin to analyse.

        Returns:
            The stored prediction record.

        Raises:
            ProviderError: If the price history cannot be fetched.
        """
        logger.info(
            "Generating prediction for symbol=%s over %d days",
            command.symbol,
            self._history_days,
        )

        points = await self._provider.get_price_history(
            command.symbol, self._history_days
        )
        prices = [p.price for p in points]
        result = predict_signal(prices, self._short_window, self._long_window)

        record = PredictionRecord(
            symbol=command.symbol.upper(),
            signal=result.signal,
            rationale=result.rationale,
            short_ma=result.short_ma,
            long_ma=result.long_ma,
            prices=prices,
            labels=[p.date_label for p in points],
            predicted_at=utcnow(),
        )
        self._ledger.append(record)
        return record
