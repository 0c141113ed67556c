"""
Health check router.

Provides a plain liveness string at the root and a JSON health endpoint
for readiness probes. No business logic.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from coinpulse.core.config import settings
from coinpulse.interfaces.market.schemas import HealthResponse

router = APIRouter(tags=["health"])

LIVENESS_TEXT = "Server is running!"


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness",
    description="Returns a plain text liveness string.",
)
def liveness() -> str:
    return LIVENESS_TEXT


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=settings.version)
