"""
FastAPI router for the live market stream.

Provides:
- WebSocket endpoint pushing quote snapshots and valuation alerts
  (mounted at ``/`` for existing clients and at ``/ws``)
- Stream status endpoint
"""

import logging

from fastapi import APIRouter, Depends, WebSocket

from coinpulse.interfaces.market.dependencies import (
    MarketServices,
    get_market_services,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


# ------------------------------------------------------------------
# WebSocket endpoint
# ------------------------------------------------------------------


@router.websocket("/")
@router.websocket("/ws")
async def market_stream(websocket: WebSocket) -> None:
    """WebSocket endpoint for live market data.

    Protocol (JSON):
        ← {"message": "Welcome to WebSocket server!"}
        ← {"marketData": {"bitcoin": {"usd": 64000.0}, ...}}   every interval
        ← {"notification": "Portfolio value changed by ..."}   on large moves
        → text or binary frames: logged, otherwise ignored
    """
    manager = get_market_services(websocket).stream_manager
    subscriber = await manager.connect(websocket)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.debug("Client %s closed the connection.", subscriber.id)
                break
            manager.handle_client_message(
                subscriber, text=message.get("text"), data=message.get("bytes")
            )
    finally:
        manager.disconnect(subscriber)


# ------------------------------------------------------------------
# Stream status
# ------------------------------------------------------------------


@router.get(
    "/api/stream/status",
    summary="Get stream status",
    description="Return WebSocket connection stats, cache state and scheduled jobs.",
)
def stream_status(
    services: MarketServices = Depends(get_market_services),
) -> dict:
    """Return streaming stats."""
    return services.stream_manager.get_status()
