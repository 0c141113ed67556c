"""
Domain-specific errors for the market bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from typing import Optional

HTTP_TOO_MANY_REQUESTS = 429


class MarketDomainError(Exception):
    """Base error for all market domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ProviderError(MarketDomainError):
    """Raised when the price provider call fails or returns a non-success status."""

    def __init__(self, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"Failed to fetch market data: {reason}")
        self.reason = reason
        self.status_code = status_code

    @property
    def rate_limited(self) -> bool:
        return self.status_code == HTTP_TOO_MANY_REQUESTS


class PredictionNotFoundError(MarketDomainError):
    """Raised when no ledger record carries the requested id."""

    def __init__(self, prediction_id: object) -> None:
        super().__init__(f"Prediction not found: {prediction_id}")
        self.prediction_id = prediction_id
