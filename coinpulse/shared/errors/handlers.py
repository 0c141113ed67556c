"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coinpulse.domain.market.errors import (
    MarketDomainError,
    PredictionNotFoundError,
    ProviderError,
)

logger = logging.getLogger(__name__)

HTTP_404 = 404
HTTP_429 = 429
HTTP_500 = 500

PREDICTION_NOT_FOUND_MESSAGE = "Prediction not found."


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(ProviderError)
    async def handle_provider_error(
        request: Request, exc: ProviderError
    ) -> JSONResponse:
        """Surface upstream failures; rate limiting passes through as 429."""
        if exc.rate_limited:
            logger.warning("Price provider rate limited %s", request.url.path)
            return _error_response(
                HTTP_429, "Rate limited by price provider", exc.message
            )
        logger.error("Price provider error on %s: %s", request.url.path, exc.reason)
        return _error_response(HTTP_500, "Error fetching market data", exc.message)

    @app.exception_handler(PredictionNotFoundError)
    async def handle_prediction_not_found(
        _request: Request, exc: PredictionNotFoundError
    ) -> JSONResponse:
        """Handle unknown ledger ids."""
        logger.warning("Prediction not found: %s", exc.prediction_id)
        return JSONResponse(
            status_code=HTTP_404, content={"message": PREDICTION_NOT_FOUND_MESSAGE}
        )

    @app.exception_handler(MarketDomainError)
    async def handle_market_domain(
        _request: Request, exc: MarketDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled market domain errors."""
        logger.error("Unhandled market domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
