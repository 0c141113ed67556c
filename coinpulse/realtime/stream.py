"""
WebSocket market stream manager.

Manages connected WebSocket subscribers and pushes quote snapshots to
each of them on its own schedule.

Architecture:
    FastAPI WebSocket endpoint  ──▶  MarketStreamManager.connect()
                                          │ schedule job per subscriber
                                          ▼
                                    BroadcastScheduler
                                          │ every interval
                                          ▼
                                    MarketStreamManager.tick(subscriber)
                                          │
                        QuoteCache.get() ─┤─ ValuationMonitor.observe()
                                          ▼
                     {"marketData": ...} [+ {"notification": ...}]

Subscriber lifecycle:
    CONNECTED ──tick──▶ FETCHING ──done──▶ CONNECTED
        └──────────── disconnect ──────────▶ DISCONNECTED (terminal)
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from coinpulse.domain.market.entities import utcnow
from coinpulse.domain.market.errors import ProviderError
from coinpulse.domain.market.quote_cache import QuoteCache
from coinpulse.domain.market.valuation import ValuationMonitor, value_snapshot
from coinpulse.realtime.scheduler import BroadcastScheduler

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to WebSocket server!"
MAX_LOGGED_MESSAGE_CHARS = 200


class SubscriberState(Enum):
    CONNECTED = "connected"
    FETCHING = "fetching"
    DISCONNECTED = "disconnected"


@dataclass
class Subscriber:
    """One live push connection."""

    websocket: Any
    id: str = field(default_factory=lambda: uuid4().hex)
    state: SubscriberState = SubscriberState.CONNECTED
    connected_at: datetime = field(default_factory=utcnow)
    ticks: int = 0

    @property
    def job_id(self) -> str:
        return f"broadcast-{self.id}"

    async def send(self, payload: dict) -> None:
        await self.websocket.send_text(json.dumps(payload, default=str))


class MarketStreamManager:
    """Pushes cached quote snapshots and valuation alerts to subscribers.

    All subscribers read the same QuoteCache and the same
    ValuationMonitor baseline. Every tick overwrites that baseline, so
    with several subscribers each one is compared against whichever tick
    ran last.

    Usage in FastAPI:
        manager = MarketStreamManager(cache, monitor, scheduler)

        @app.websocket("/ws")
        async def ws_endpoint(ws: WebSocket):
            subscriber = await manager.connect(ws)
            try:
                while True:
                    message = await ws.receive()
                    if message["type"] == "websocket.disconnect":
                        break
                    manager.handle_client_message(
                        subscriber, message.get("text"), message.get("bytes")
                    )
            finally:
                manager.disconnect(subscriber)
    """

    def __init__(
        self,
        quote_cache: QuoteCache,
        valuation_monitor: ValuationMonitor,
        scheduler: BroadcastScheduler,
    ) -> None:
        self._cache = quote_cache
        self._monitor = valuation_monitor
        self._scheduler = scheduler
        self._subscribers: dict[str, Subscriber] = {}
        self._stats = {
            "total_connections": 0,
            "total_ticks": 0,
            "skipped_ticks": 0,
            "total_messages_sent": 0,
            "total_notifications_sent": 0,
            "total_messages_received": 0,
        }

    @property
    def active_connections(self) -> int:
        return len(self._subscribers)

    @property
    def stats(self) -> dict:
        return {**self._stats, "active_connections": self.active_connections}

    @property
    def subscribers(self) -> list[Subscriber]:
        return list(self._subscribers.values())

    # ------------------------------------------------------------------
    # WebSocket lifecycle
    # ------------------------------------------------------------------

    async def connect(self, websocket: Any) -> Subscriber:
        """Accept a WebSocket, greet it and start its broadcast job."""
        await websocket.accept()
        subscriber = Subscriber(websocket=websocket)
        self._subscribers[subscriber.id] = subscriber
        self._stats["total_connections"] += 1
        logger.info(
            "Client %s connected to market stream. Active: %d",
            subscriber.id,
            self.active_connections,
        )

        try:
            await subscriber.send({"message": WELCOME_MESSAGE})
        except Exception:
            self.disconnect(subscriber)
            raise
        self._scheduler.schedule(subscriber.job_id, self.tick, subscriber)
        return subscriber

    def disconnect(self, subscriber: Subscriber) -> bool:
        """Cancel the subscriber's job and forget it.

        Safe to call more than once; only the first call has an effect.
        """
        if subscriber.state is SubscriberState.DISCONNECTED:
            return False
        subscriber.state = SubscriberState.DISCONNECTED
        self._subscribers.pop(subscriber.id, None)
        self._scheduler.cancel(subscriber.job_id)
        logger.info(
            "Client %s disconnected. Active: %d",
            subscriber.id,
            self.active_connections,
        )
        return True

    def disconnect_all(self) -> int:
        """Disconnect every subscriber. Returns how many were dropped."""
        return sum(1 for s in self.subscribers if self.disconnect(s))

    def handle_client_message(
        self,
        subscriber: Subscriber,
        text: Optional[str] = None,
        data: Optional[bytes] = None,
    ) -> None:
        """Inbound frames carry no commands; they are only logged.

        Binary frames are logged by size, never by content.
        """
        self._stats["total_messages_received"] += 1
        if text is not None:
            logger.info(
                "Received from %s: %s", subscriber.id, text[:MAX_LOGGED_MESSAGE_CHARS]
            )
        else:
            logger.info(
                "Received %d bytes from %s", len(data or b""), subscriber.id
            )

    # ------------------------------------------------------------------
    # Broadcasting
    # ------------------------------------------------------------------

    async def tick(self, subscriber: Subscriber) -> None:
        """Push one snapshot (and maybe a notification) to a subscriber.

        Provider failures skip the tick; the job stays scheduled and the
        next tick retries. A failed push disconnects the subscriber.
        """
        if subscriber.state is SubscriberState.DISCONNECTED:
            return

        subscriber.state = SubscriberState.FETCHING
        subscriber.ticks += 1
        self._stats["total_ticks"] += 1
        try:
            try:
                snapshot = await self._cache.get()
            except ProviderError as exc:
                self._stats["skipped_ticks"] += 1
                logger.error("WebSocket tick for %s skipped: %s", subscriber.id, exc.message)
                return

            # baseline moves with every fetched snapshot, delivered or not
            change = self._monitor.observe(value_snapshot(snapshot))
            if not await self._push(subscriber, {"marketData": snapshot.to_payload()}):
                return

            if change.should_notify:
                if await self._push(subscriber, {"notification": change.notification_text}):
                    self._stats["total_notifications_sent"] += 1
        except Exception:
            logger.exception("WebSocket tick for %s failed.", subscriber.id)
        finally:
            if subscriber.state is SubscriberState.FETCHING:
                subscriber.state = SubscriberState.CONNECTED

    async def _push(self, subscriber: Subscriber, payload: dict) -> bool:
        try:
            await subscriber.send(payload)
        except Exception as exc:
            logger.warning("Push to %s failed (%s); dropping client.", subscriber.id, exc)
            self.disconnect(subscriber)
            return False
        self._stats["total_messages_sent"] += 1
        return True

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> dict:
        return {
            **self.stats,
            "tracked_symbols": self._cache.tracked_symbols,
            "cache": {
                "ttl_seconds": self._cache.ttl_seconds,
                "fresh": self._cache.is_fresh(),
                **self._cache.stats,
            },
            "scheduler": self._scheduler.get_status(),
        }
