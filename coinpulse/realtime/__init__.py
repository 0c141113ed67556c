"""
Real-time market broadcast.

Provides:
- **MarketStreamManager**: WebSocket subscribers and the per-tick
  snapshot/notification push.
- **BroadcastScheduler**: APScheduler-based interval jobs, one per
  subscriber.
"""

from coinpulse.realtime.scheduler import BroadcastScheduler
from coinpulse.realtime.stream import MarketStreamManager, Subscriber, SubscriberState

__all__ = [
    "BroadcastScheduler",
    "MarketStreamManager",
    "Subscriber",
    "SubscriberState",
]
