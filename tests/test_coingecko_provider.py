"""
Tests for the CoinGecko adapter.

HTTP is served by ``httpx.MockTransport``; no network access.
"""

from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from coinpulse.domain.market.errors import ProviderError
from coinpulse.infrastructure.market.coingecko_provider import (
    API_KEY_HEADER,
    CoinGeckoQuoteProvider,
)

BASE_URL = "https://coingecko.test/api/v3"


def _provider(handler, **kwargs) -> CoinGeckoQuoteProvider:
    return CoinGeckoQuoteProvider(
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestGetQuotes:
    """Tests for /simple/price."""

    @pytest.mark.asyncio
    async def test_parses_prices(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json={"bitcoin": {"usd": 64000.5}, "ethereum": {"usd": 3100}},
            )

        snapshot = await _provider(handler).get_quotes(["bitcoin", "ethereum"])

        assert seen["path"] == "/api/v3/simple/price"
        assert seen["params"] == {"ids": "bitcoin,ethereum", "vs_currencies": "usd"}
        assert snapshot.quotes["bitcoin"].price == Decimal("64000.5")
        assert snapshot.to_payload() == {
            "bitcoin": {"usd": 64000.5},
            "ethereum": {"usd": 3100.0},
        }

    @pytest.mark.asyncio
    async def test_skips_entries_without_price(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"bitcoin": {"usd": 1}, "nocoin": {}})

        snapshot = await _provider(handler).get_quotes(["bitcoin", "nocoin"])

        assert snapshot.symbols == ["bitcoin"]

    @pytest.mark.asyncio
    async def test_sends_api_key_header(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers.get(API_KEY_HEADER)
            return httpx.Response(200, json={})

        await _provider(handler, api_key="secret").get_quotes(["bitcoin"])

        assert seen["key"] == "secret"

    @pytest.mark.asyncio
    async def test_rate_limit_maps_to_rate_limited_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"status": "throttled"})

        with pytest.raises(ProviderError) as exc_info:
            await _provider(handler).get_quotes(["bitcoin"])

        assert exc_info.value.status_code == 429
        assert exc_info.value.rate_limited is True

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="boom")

        with pytest.raises(ProviderError) as exc_info:
            await _provider(handler).get_quotes(["bitcoin"])

        assert exc_info.value.status_code == 500
        assert exc_info.value.rate_limited is False

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProviderError) as exc_info:
            await _provider(handler).get_quotes(["bitcoin"])

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>not json</html>")

        with pytest.raises(ProviderError):
            await _provider(handler).get_quotes(["bitcoin"])


class TestGetPriceHistory:
    """Tests for /coins/{id}/market_chart."""

    @pytest.mark.asyncio
    async def test_parses_samples(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json={
                    "prices": [[1704067200000, 42000.1], [1704153600000, 43000]],
                    "market_caps": [],
                },
            )

        points = await _provider(handler).get_price_history("Bitcoin", 10)

        assert seen["path"] == "/api/v3/coins/bitcoin/market_chart"
        assert seen["params"] == {"vs_currency": "usd", "days": "10"}
        assert [p.price for p in points] == [Decimal("42000.1"), Decimal("43000")]
        assert points[0].timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert points[1].date_label == "2024-01-02"

    @pytest.mark.asyncio
    async def test_missing_prices_key(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"error": "coin not found"})

        with pytest.raises(ProviderError):
            await _provider(handler).get_price_history("nocoin", 10)

    @pytest.mark.asyncio
    async def test_malformed_sample(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"prices": [["soon", 1]]})

        with pytest.raises(ProviderError):
            await _provider(handler).get_price_history("bitcoin", 10)

    @pytest.mark.asyncio
    async def test_unknown_coin_404(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "coin not found"})

        with pytest.raises(ProviderError) as exc_info:
            await _provider(handler).get_price_history("nocoin", 10)

        assert exc_info.value.status_code == 404
