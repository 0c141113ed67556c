"""
Pydantic schemas for market API request/response validation.

These schemas define the API contract. JSON keys keep the camelCase
names existing dashboard clients read (``shortTermMA``, ``weeklyAccuracy``),
while Python attributes stay snake_case.
No business logic belongs here.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PredictionResponse(_CamelModel):
    """A ledger record as returned by the prediction endpoints."""

    id: int
    symbol: str
    prediction: str = Field(..., description="Signal: Buy, Sell or Hold")
    rationale: str
    short_term_ma: float = Field(..., alias="shortTermMA")
    long_term_ma: float = Field(..., alias="longTermMA")
    prices: list[float]
    timestamps: list[str] = Field(..., description="Date label of each price")
    actual: str | None = None
    timestamp: datetime = Field(..., description="When the prediction was made")


class RecordOutcomeRequest(BaseModel):
    """Request schema for annotating a prediction.

    Attributes:
        id: Ledger id. Any JSON value is accepted; anything that is not a
            whole number (or a string holding one) is treated as absent.
        actual: Observed outcome, compared verbatim with the signal.
            Non-string values are stored in their string form.
    """

    id: Any = None
    actual: Any = None


class AccuracyItem(BaseModel):
    """Accuracy over the lookback window."""

    accuracy: float = Field(..., description="Percent correct, 2 decimals")
    total: int
    correct: int


class AccuracyResponse(_CamelModel):
    """Response schema for the accuracy endpoint."""

    weekly_accuracy: AccuracyItem = Field(..., alias="weeklyAccuracy")
    historical_data: list[PredictionResponse] = Field(..., alias="historicalData")


class PortfolioResponse(_CamelModel):
    """Response schema for the portfolio endpoint."""

    data: dict[str, dict[str, float]]
    portfolio_value: float = Field(..., alias="portfolioValue")


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by the error handlers."""

    error: str
    detail: str | None = None


class NotFoundResponse(BaseModel):
    """Error body for an unknown prediction id."""

    message: str
