"""
Bounded TTL cache for fetched price data.

Entries expire a fixed number of seconds after insertion and the number of
distinct tracked keys is capped; when the cap is exceeded the oldest tracked
key is evicted first (FIFO), whatever its remaining TTL.
"""

import threading
import time
from collections import Counter, deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, Optional

from src.logging_config import get_logger

logger = get_logger(__name__)

CURRENT_PRICES_KEY = "current_prices"


def range_cache_key(start_date: str, end_date: str, domain: Optional[str] = None) -> str:
    """
    Cache key for a range query, built from the raw query strings.

    Identical raw strings map to the same key; dates are not normalised.
    """
    return f"prices_{start_date}_{end_date}_{domain or 'default'}"


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the clock reading at insertion."""
    key: str
    value: Any
    inserted_at: float


class BoundedTTLCache:
    """In-memory cache with lazy TTL expiry and FIFO eviction of the oldest tracked key."""

    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_size: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        # One element per put, overwrites included
        self._insertion_order: Deque[str] = deque()
        self._tracked: Counter = Counter()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Returns:
            The value, or None if the key is absent or expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if self._clock() - entry.inserted_at >= self.ttl_seconds:
                del self._entries[key]
                self._misses += 1
                logger.debug("Cache entry expired", key=key)
                return None

            self._hits += 1
            return entry.value

    def put(self, key: str, value: Any) -> None:
        """
        Insert or replace a value and apply FIFO eviction.

        Re-inserting an existing key appends another tracking element; the key
        keeps its place in the FIFO order until its oldest element is popped.
        Eviction starts once more than max_size distinct keys are tracked and
        never removes the value written by this call.
        """
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, inserted_at=self._clock())
            self._insertion_order.append(key)
            self._tracked[key] += 1

            # Only a new key grows the distinct count, so the oldest tracked
            # key is never the one just written
            while len(self._tracked) > self.max_size:
                self._evict(self._insertion_order[0])

            if len(self._insertion_order) > 2 * self.max_size:
                self._compact_tracking()

    def _evict(self, key: str) -> None:
        """Remove a key's value and every tracking element for it."""
        self._entries.pop(key, None)
        del self._tracked[key]
        self._insertion_order = deque(k for k in self._insertion_order if k != key)
        self._evictions += 1
        logger.debug("Evicted oldest cache entry", key=key, max_size=self.max_size)

    def _compact_tracking(self) -> None:
        """
        Drop duplicate tracking elements, keeping each key's first and last one.

        The first element keeps the key's FIFO position and the last one keeps
        a refreshed key tracked. Bounds the deque at twice the distinct keys.
        """
        first_seen: Dict[str, int] = {}
        last_seen: Dict[str, int] = {}
        for index, key in enumerate(self._insertion_order):
            first_seen.setdefault(key, index)
            last_seen[key] = index

        keep = set(first_seen.values()) | set(last_seen.values())
        self._insertion_order = deque(
            key for index, key in enumerate(self._insertion_order) if index in keep
        )
        self._tracked = Counter(self._insertion_order)

    def clear(self) -> int:
        """
        Remove all entries.

        Returns:
            Number of entries cleared
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._insertion_order.clear()
            self._tracked.clear()
            return count

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            now = self._clock()
            live = sum(
                1 for entry in self._entries.values()
                if now - entry.inserted_at < self.ttl_seconds
            )
            return {
                "entries": len(self._entries),
                "live_entries": live,
                "tracked_keys": len(self._tracked),
                "tracked_insertions": len(self._insertion_order),
                "max_size": self.max_size,
                "ttl_seconds": self.ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._clock() - entry.inserted_at < self.ttl_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
