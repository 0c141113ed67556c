"""
Dependency injection for the market bounded context.

``build_market_services`` is the composition root: it creates the
long-lived, process-wide objects (provider adapter, ledger, quote cache,
valuation baseline, broadcast scheduler and stream manager). The app
lifespan stores the result on ``app.state.market`` so it starts and
stops with the server.

The ``get_*_use_case`` functions are FastAPI dependencies that wire
those objects into use cases via constructor injection.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from starlette.requests import HTTPConnection

from coinpulse.application.market.generate_prediction import GeneratePredictionUseCase
from coinpulse.application.market.get_accuracy import GetAccuracyUseCase
from coinpulse.application.market.get_market_data import GetMarketDataUseCase
from coinpulse.application.market.get_portfolio import GetPortfolioUseCase
from coinpulse.application.market.record_outcome import RecordOutcomeUseCase
from coinpulse.core.config import Settings
from coinpulse.domain.market.ports import PredictionLedger, PriceQuoteProvider
from coinpulse.domain.market.quote_cache import QuoteCache
from coinpulse.domain.market.valuation import ValuationMonitor
from coinpulse.infrastructure.market.coingecko_provider import CoinGeckoQuoteProvider
from coinpulse.infrastructure.market.prediction_ledger import InMemoryPredictionLedger
from coinpulse.realtime.scheduler import BroadcastScheduler
from coinpulse.realtime.stream import MarketStreamManager


@dataclass
class MarketServices:
    """Process-wide state of the market context."""

    settings: Settings
    provider: PriceQuoteProvider
    ledger: PredictionLedger
    quote_cache: QuoteCache
    valuation_monitor: ValuationMonitor
    scheduler: BroadcastScheduler
    stream_manager: MarketStreamManager


def build_market_services(
    settings: Settings,
    provider: Optional[PriceQuoteProvider] = None,
    ledger: Optional[PredictionLedger] = None,
) -> MarketServices:
    """Create every long-lived market component from settings.

    Args:
        settings: Application settings.
        provider: Price provider to use instead of CoinGecko.
        ledger: Prediction store to use instead of the in-memory one.

    Returns:
        The wired services. The scheduler is not started yet.
    """
    if provider is None:
        provider = CoinGeckoQuoteProvider(
            base_url=settings.coingecko_base_url,
            vs_currency=settings.vs_currency,
            timeout=settings.provider_timeout_seconds,
            api_key=settings.coingecko_api_key,
        )
    quote_cache = QuoteCache(
        provider=provider,
        tracked_symbols=settings.tracked_symbols,
        ttl_seconds=settings.quote_cache_ttl_seconds,
    )
    valuation_monitor = ValuationMonitor(
        threshold_percent=settings.notification_threshold_percent,
    )
    scheduler = BroadcastScheduler(interval_seconds=settings.broadcast_interval_seconds)
    return MarketServices(
        settings=settings,
        provider=provider,
        ledger=ledger if ledger is not None else InMemoryPredictionLedger(),
        quote_cache=quote_cache,
        valuation_monitor=valuation_monitor,
        scheduler=scheduler,
        stream_manager=MarketStreamManager(quote_cache, valuation_monitor, scheduler),
    )


def get_market_services(connection: HTTPConnection) -> MarketServices:
    """Return the services created by the app lifespan."""
    services = getattr(connection.app.state, "market", None)
    if services is None:
        raise RuntimeError(
            "Market services not initialized. "
            "Ensure the app lifespan has started."
        )
    return services


def get_market_data_use_case(
    services: MarketServices = Depends(get_market_services),
) -> GetMarketDataUseCase:
    """Build GetMarketDataUseCase with its infrastructure dependencies."""
    return GetMarketDataUseCase(provider=services.provider)


def get_generate_prediction_use_case(
    services: MarketServices = Depends(get_market_services),
) -> GeneratePredictionUseCase:
    """Build GeneratePredictionUseCase with its infrastructure dependencies."""
    return GeneratePredictionUseCase(
        provider=services.provider,
        ledger=services.ledger,
        history_days=services.settings.prediction_history_days,
        short_window=services.settings.short_window,
        long_window=services.settings.long_window,
    )


def get_record_outcome_use_case(
    services: MarketServices = Depends(get_market_services),
) -> RecordOutcomeUseCase:
    """Build RecordOutcomeUseCase with its infrastructure dependencies."""
    return RecordOutcomeUseCase(ledger=services.ledger)


def get_accuracy_use_case(
    services: MarketServices = Depends(get_market_services),
) -> GetAccuracyUseCase:
    """Build GetAccuracyUseCase with its infrastructure dependencies."""
    return GetAccuracyUseCase(ledger=services.ledger)


def get_portfolio_use_case(
    services: MarketServices = Depends(get_market_services),
) -> GetPortfolioUseCase:
    """Build GetPortfolioUseCase with its infrastructure dependencies."""
    return GetPortfolioUseCase(provider=services.provider)
