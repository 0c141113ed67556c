"""
Use case: Look up the spot price of one coin.

Input: GetMarketDataQuery (symbol)
Output: price map ``{symbol: {currency: price}}``
Side effects: None. Goes straight to the provider, bypassing the quote cache.
Failure cases: ProviderError.
"""

import logging

from coinpulse.application.market.dtos import GetMarketDataQuery
from coinpulse.domain.market.ports import PriceQuoteProvider

logger = logging.getLogger(__name__)


class GetMarketDataUseCase:
    """Fetches a fresh quote for a single symbol."""

    def __init__(self, provider: PriceQuoteProvider) -> None:
        self._provider = provider

    async def execute(self, query: GetMarketDataQuery) -> dict[str, dict[str, float]]:
        logger.info("Fetching market data for symbol=%s", query.symbol)
        snapshot = await self._provider.get_quotes([query.symbol])
        return snapshot.to_payload()
