"""
Adapter: CoinGecko price provider.

Implements PriceQuoteProvider against the public CoinGecko REST API:
    - ``GET /simple/price``           spot prices for a list of coin ids
    - ``GET /coins/{id}/market_chart`` historical price series

Every failure (transport error, non-2xx status, malformed body) is raised
as ProviderError. Nothing is retried.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from coinpulse.domain.market.entities import (
    PricePoint,
    PriceQuote,
    QuoteSnapshot,
    utcnow,
)
from coinpulse.domain.market.errors import ProviderError
from coinpulse.domain.market.ports import PriceQuoteProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"
API_KEY_HEADER = "x-cg-demo-api-key"


def _to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ProviderError(f"unexpected price value {value!r}") from exc


class CoinGeckoQuoteProvider(PriceQuoteProvider):
    """Concrete adapter for the CoinGecko price API.

    A short-lived ``httpx.AsyncClient`` is opened per call so the adapter
    is not tied to any particular event loop.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        vs_currency: str = "usd",
        timeout: float = 10.0,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._vs_currency = vs_currency
        self._timeout = timeout
        self._api_key = api_key
        self._transport = transport

    @property
    def vs_currency(self) -> str:
        return self._vs_currency

    async def get_quotes(self, symbols: list[str]) -> QuoteSnapshot:
        """Return spot prices for ``symbols`` from ``/simple/price``."""
        body = await self._get_json(
            "/simple/price",
            params={"ids": ",".join(symbols), "vs_currencies": self._vs_currency},
        )
        if not isinstance(body, dict):
            raise ProviderError("unexpected simple/price payload")

        fetched_at = utcnow()
        quotes: dict[str, PriceQuote] = {}
        for symbol, prices in body.items():
            price = prices.get(self._vs_currency) if isinstance(prices, dict) else None
            if price is None:
                continue
            quotes[symbol] = PriceQuote(
                symbol=symbol,
                price=_to_decimal(price),
                fetched_at=fetched_at,
            )

        return QuoteSnapshot(
            quotes=quotes,
            vs_currency=self._vs_currency,
            fetched_at=fetched_at,
        )

    async def get_price_history(self, symbol: str, days: int) -> list[PricePoint]:
        """Return ``[timestamp, price]`` samples from ``/coins/{id}/market_chart``."""
        body = await self._get_json(
            f"/coins/{symbol.lower()}/market_chart",
            params={"vs_currency": self._vs_currency, "days": days},
        )
        raw_prices = body.get("prices") if isinstance(body, dict) else None
        if not isinstance(raw_prices, list):
            raise ProviderError("unexpected market_chart payload")

        points = []
        for item in raw_prices:
            try:
                millis, price = item[0], item[1]
                timestamp = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
            except (IndexError, TypeError, KeyError, ValueError, OverflowError) as exc:
                raise ProviderError(f"malformed price sample {item!r}") from exc
            points.append(PricePoint(timestamp=timestamp, price=_to_decimal(price)))
        return points

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers[API_KEY_HEADER] = self._api_key

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                resp = await client.get(path, params=params, headers=headers)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("CoinGecko %s returned HTTP %d", path, status)
            raise ProviderError(f"HTTP {status} from {path}", status_code=status) from exc
        except httpx.HTTPError as exc:
            logger.warning("CoinGecko %s request failed: %s", path, exc)
            raise ProviderError(str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise ProviderError(f"invalid JSON from {path}") from exc
