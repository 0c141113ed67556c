"""
Shared test doubles for the market context.

FakeQuoteProvider stands in for CoinGecko: it serves canned prices and
price histories, records every call and can be told to fail.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from coinpulse.domain.market.entities import PricePoint, PriceQuote, QuoteSnapshot
from coinpulse.domain.market.errors import ProviderError
from coinpulse.domain.market.ports import PriceQuoteProvider
from coinpulse.shared.security.rate_limiting import limiter

HISTORY_START = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeQuoteProvider(PriceQuoteProvider):
    """In-process provider with canned data."""

    def __init__(self, prices=None, histories=None, vs_currency="usd"):
        self.prices = dict(prices or {})
        self.histories = dict(histories or {})
        self.vs_currency = vs_currency
        self.error: ProviderError | None = None
        self.quote_calls: list[list[str]] = []
        self.history_calls: list[tuple[str, int]] = []

    async def get_quotes(self, symbols):
        self.quote_calls.append(list(symbols))
        if self.error is not None:
            raise self.error
        now = datetime.now(timezone.utc)
        quotes = {
            s: PriceQuote(symbol=s, price=Decimal(str(self.prices[s])), fetched_at=now)
            for s in symbols
            if s in self.prices
        }
        return QuoteSnapshot(quotes=quotes, vs_currency=self.vs_currency, fetched_at=now)

    async def get_price_history(self, symbol, days):
        self.history_calls.append((symbol, days))
        if self.error is not None:
            raise self.error
        return [
            PricePoint(
                timestamp=HISTORY_START + timedelta(days=i),
                price=Decimal(str(price)),
            )
            for i, price in enumerate(self.histories.get(symbol, []))
        ]


@pytest.fixture
def provider() -> FakeQuoteProvider:
    return FakeQuoteProvider(
        prices={"bitcoin": 100, "ethereum": 50, "dogecoin": 0.25, "litecoin": 10},
        histories={"bitcoin": list(range(1, 11))},
    )


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()
