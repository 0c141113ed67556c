"""
Use case: Value a portfolio of coins at current prices.

Input: GetPortfolioQuery (symbols)
Output: PortfolioResult
Side effects: None. Uncached: always a fresh provider call for exactly
the requested symbols.
Failure cases: ProviderError.
"""

import logging

from coinpulse.application.market.dtos import GetPortfolioQuery, PortfolioResult
from coinpulse.domain.market.ports import PriceQuoteProvider

logger = logging.getLogger(__name__)


class GetPortfolioUseCase:
    """Sums current prices over a caller-chosen symbol set."""

    def __init__(self, provider: PriceQuoteProvider) -> None:
        self._provider = provider

    async def execute(self, query: GetPortfolioQuery) -> PortfolioResult:
        logger.info("Valuing portfolio of %d symbols", len(query.symbols))
        snapshot = await self._provider.get_quotes(list(query.symbols))
        return PortfolioResult(
            prices=snapshot.to_payload(),
            portfolio_value=snapshot.total(list(query.symbols)),
        )
