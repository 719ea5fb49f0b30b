"""In-memory TTL cache of quote results keyed by market-qualified symbol."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from networth.domain.views import PriceResult

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600


@dataclass
class CacheEntry:
    value: PriceResult
    fetched_at: float


class PriceCache:
    """
    Short-lived memo of PriceResults, e.g. "CN:SH600519" -> PriceResult.

    Expired entries stay in place until the next `set` for the same key
    overwrites them. No size bound: the symbol universe is small.
    Not thread-safe; callers share it from a single event loop.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[PriceResult]:
        """Return the cached result if younger than the TTL, else None."""
        entry = self._entries.get(key.upper())
        if entry is None:
            return None
        if self._clock() - entry.fetched_at < self._ttl:
            logger.debug("Price cache hit for %s", key)
            return entry.value
        return None

    def set(self, key: str, value: PriceResult) -> None:
        """Store a result, replacing whatever was cached for the key."""
        self._entries[key.upper()] = CacheEntry(value=value, fetched_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
