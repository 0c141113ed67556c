"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (market REST API, live stream, health)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting, CORS)
- Logging configuration
- Market services (quote cache, ledger, broadcast scheduler), started and
  stopped with the application

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from coinpulse.core.config import settings
from coinpulse.domain.market.ports import PredictionLedger, PriceQuoteProvider
from coinpulse.interfaces.health import router as health_router
from coinpulse.interfaces.market.dependencies import build_market_services
from coinpulse.interfaces.market.router import router as market_router
from coinpulse.interfaces.realtime import router as realtime_router
from coinpulse.shared.errors.handlers import register_error_handlers
from coinpulse.shared.logging import configure_logging
from coinpulse.shared.security.headers import SecurityHeadersMiddleware
from coinpulse.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


def create_app(
    provider: Optional[PriceQuoteProvider] = None,
    ledger: Optional[PredictionLedger] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        provider: Price provider override (defaults to CoinGecko).
        ledger: Prediction store override (defaults to in-memory).

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build market services on startup; stop broadcasting on shutdown."""
        services = build_market_services(settings, provider=provider, ledger=ledger)
        app.state.market = services
        services.scheduler.start()
        logger.info(
            "Tracking %s; cache TTL %ss; broadcast every %ss.",
            ",".join(settings.tracked_symbols),
            settings.quote_cache_ttl_seconds,
            settings.broadcast_interval_seconds,
        )

        yield

        dropped = services.stream_manager.disconnect_all()
        services.scheduler.stop()
        logger.info("Market services stopped (%d subscribers dropped).", dropped)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(market_router)
    app.include_router(realtime_router)

    return app


app = create_app()
