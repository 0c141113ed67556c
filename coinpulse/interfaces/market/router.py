"""
FastAPI router for the market bounded context.

All routes delegate to use cases. No business logic here.
Malformed query parameters and body fields fall back to defaults
instead of being rejected. Error mapping is handled by centralized
error handlers.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request

from coinpulse.application.market.dtos import (
    GeneratePredictionCommand,
    GetAccuracyQuery,
    GetMarketDataQuery,
    GetPortfolioQuery,
    RecordOutcomeCommand,
)
from coinpulse.application.market.generate_prediction import GeneratePredictionUseCase
from coinpulse.application.market.get_accuracy import GetAccuracyUseCase
from coinpulse.application.market.get_market_data import GetMarketDataUseCase
from coinpulse.application.market.get_portfolio import GetPortfolioUseCase
from coinpulse.application.market.record_outcome import RecordOutcomeUseCase
from coinpulse.core.config import settings
from coinpulse.domain.market.entities import PredictionRecord
from coinpulse.interfaces.market.dependencies import (
    get_accuracy_use_case,
    get_generate_prediction_use_case,
    get_market_data_use_case,
    get_portfolio_use_case,
    get_record_outcome_use_case,
)
from coinpulse.interfaces.market.schemas import (
    AccuracyItem,
    AccuracyResponse,
    ErrorResponse,
    NotFoundResponse,
    PortfolioResponse,
    PredictionResponse,
    RecordOutcomeRequest,
)
from coinpulse.shared.security.rate_limiting import HEAVY_RATE_LIMIT, limiter

router = APIRouter(prefix="/api", tags=["market"])

UPSTREAM_ERRORS = {
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _symbol_or_default(symbol: str | None) -> str:
    symbol = (symbol or "").strip()
    return symbol or settings.default_symbol


def _split_symbols(raw: str | None) -> tuple[str, ...]:
    symbols = tuple(s.strip() for s in (raw or "").split(",") if s.strip())
    return symbols or (settings.default_symbol,)


def _parse_prediction_id(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def _outcome_text(raw: Any) -> str | None:
    if raw is None or isinstance(raw, str):
        return raw
    return str(raw)


def _to_prediction_response(record: PredictionRecord) -> PredictionResponse:
    return PredictionResponse(
        id=record.id,
        symbol=record.symbol,
        prediction=record.signal.value,
        rationale=record.rationale,
        short_term_ma=float(record.short_ma),
        long_term_ma=float(record.long_ma),
        prices=[float(p) for p in record.prices],
        timestamps=record.labels,
        actual=record.actual,
        timestamp=record.predicted_at,
    )


@router.get(
    "/market-data",
    response_model=dict[str, dict[str, float]],
    responses=UPSTREAM_ERRORS,
    summary="Spot price of one coin",
    description="Fetch the current price of a coin straight from the provider.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
async def get_market_data(
    request: Request,
    symbol: str | None = None,
    use_case: GetMarketDataUseCase = Depends(get_market_data_use_case),
) -> dict[str, dict[str, float]]:
    """Return ``{symbol: {currency: price}}`` for one coin."""
    query = GetMarketDataQuery(symbol=_symbol_or_default(symbol))
    return await use_case.execute(query)


@router.get(
    "/predict",
    response_model=PredictionResponse,
    responses=UPSTREAM_ERRORS,
    summary="Generate a moving-average prediction",
    description=(
        "Fetch recent price history, compute short/long moving averages, "
        "record a Buy/Sell/Hold prediction and return it."
    ),
)
@limiter.limit(HEAVY_RATE_LIMIT)
async def predict(
    request: Request,
    symbol: str | None = None,
    use_case: GeneratePredictionUseCase = Depends(get_generate_prediction_use_case),
) -> PredictionResponse:
    """Generate and record a prediction for a coin."""
    command = GeneratePredictionCommand(symbol=_symbol_or_default(symbol))
    record = await use_case.execute(command)
    return _to_prediction_response(record)


@router.post(
    "/actual",
    response_model=PredictionResponse,
    responses={404: {"model": NotFoundResponse}},
    summary="Record a prediction outcome",
    description="Annotate a recorded prediction with what actually happened.",
)
def record_actual(
    body: RecordOutcomeRequest,
    use_case: RecordOutcomeUseCase = Depends(get_record_outcome_use_case),
) -> PredictionResponse:
    """Set the actual outcome of a prediction and return the record."""
    command = RecordOutcomeCommand(
        prediction_id=_parse_prediction_id(body.id),
        actual=_outcome_text(body.actual),
    )
    record = use_case.execute(command)
    return _to_prediction_response(record)


@router.get(
    "/accuracy",
    response_model=AccuracyResponse,
    summary="Prediction accuracy",
    description="Accuracy of resolved predictions over the last week, plus the full history.",
)
def get_accuracy(
    use_case: GetAccuracyUseCase = Depends(get_accuracy_use_case),
) -> AccuracyResponse:
    """Return the weekly accuracy roll-up and every recorded prediction."""
    report, history = use_case.execute(
        GetAccuracyQuery(window_days=settings.accuracy_window_days)
    )
    return AccuracyResponse(
        weekly_accuracy=AccuracyItem(
            accuracy=report.accuracy,
            total=report.total,
            correct=report.correct,
        ),
        historical_data=[_to_prediction_response(r) for r in history],
    )


@router.get(
    "/portfolio",
    response_model=PortfolioResponse,
    responses=UPSTREAM_ERRORS,
    summary="Value a portfolio",
    description="Fetch fresh prices for a comma-separated list of coins and sum them.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
async def get_portfolio(
    request: Request,
    symbols: str | None = None,
    use_case: GetPortfolioUseCase = Depends(get_portfolio_use_case),
) -> PortfolioResponse:
    """Return raw prices and their sum."""
    result = await use_case.execute(GetPortfolioQuery(symbols=_split_symbols(symbols)))
    return PortfolioResponse(
        data=result.prices,
        portfolio_value=float(result.portfolio_value),
    )
