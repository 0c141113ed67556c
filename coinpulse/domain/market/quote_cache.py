"""
Time-bounded cache of the latest quote snapshot for the tracked symbols.

The cache is the only path to the price provider for the live broadcast.
It holds one snapshot at a time and refreshes it once the snapshot is
``ttl_seconds`` old. There is no manual purge and no partial refresh.
A failed refresh raises; the stale snapshot is never served in its place.
"""

import logging
import time
from typing import Callable, Iterable, Optional

from coinpulse.domain.market.entities import QuoteSnapshot
from coinpulse.domain.market.ports import PriceQuoteProvider

logger = logging.getLogger(__name__)


class QuoteCache:
    """Caches provider snapshots for a fixed set of symbols.

    Usage:
        cache = QuoteCache(provider, ["bitcoin", "ethereum"], ttl_seconds=60)
        snapshot = await cache.get()
    """

    def __init__(
        self,
        provider: PriceQuoteProvider,
        tracked_symbols: Iterable[str],
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._tracked = list(tracked_symbols)
        self._ttl = ttl_seconds
        self._clock = clock
        self._snapshot: Optional[QuoteSnapshot] = None
        self._loaded_at = 0.0
        self._stats = {"hits": 0, "misses": 0}

    @property
    def tracked_symbols(self) -> list[str]:
        return list(self._tracked)

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def stats(self) -> dict:
        return dict(self._stats)

    def is_fresh(self) -> bool:
        """True while the current snapshot is younger than the TTL."""
        if self._snapshot is None:
            return False
        return self._clock() - self._loaded_at < self._ttl

    async def get(self, symbols: Optional[Iterable[str]] = None) -> QuoteSnapshot:
        """Return the cached snapshot, refreshing it first if it expired.

        ``symbols`` does not narrow or widen the fetch: the cache always
        serves the tracked set. Callers that need another set go to the
        provider directly.

        Raises:
            ProviderError: If a refresh is needed and the provider fails.
        """
        if self.is_fresh():
            self._stats["hits"] += 1
            return self._snapshot

        self._stats["misses"] += 1
        logger.debug("Quote cache miss; fetching %s", ",".join(self._tracked))
        snapshot = await self._provider.get_quotes(self._tracked)
        self._snapshot = snapshot
        self._loaded_at = self._clock()
        return snapshot
