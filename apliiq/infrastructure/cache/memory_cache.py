import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from apliiq.core.logging import get_logger

logger = get_logger(__name__)

V = TypeVar("V")


def monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value with its insertion time. Replaced, never mutated."""

    value: V
    inserted_at: float
    ttl_ms: int

    def is_stale(self, now: float) -> bool:
        """
        Check if the entry has outlived its TTL.

        Args:
            now: Current time in milliseconds, same clock as ``inserted_at``

        Returns:
            True once ``ttl_ms`` or more has elapsed since insertion
        """
        return now - self.inserted_at >= self.ttl_ms


class ResponseCache(Generic[V]):
    """
    Capacity-bounded in-memory cache with LRU eviction and per-entry TTL.

    Staleness is checked lazily on every read; there is no sweeper thread.
    Reads refresh recency, so a recently read entry outlives unread ones
    when the cache is full.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        allow_stale: bool = False,
        clock: Callable[[], float] = monotonic_ms,
    ):
        """
        Initialize the cache.

        Args:
            max_entries: Maximum number of live entries
            allow_stale: Serve a stale entry once (then drop it) instead of a miss
            clock: Millisecond clock used for insertion times and expiry
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.max_entries = max_entries
        self.allow_stale = allow_stale
        self._clock = clock

        self._entries: "OrderedDict[str, CacheEntry[V]]" = OrderedDict()
        self._lock = threading.RLock()

        self.hits = 0
        self.misses = 0

        logger.debug(f"In-memory cache initialized with max_entries={max_entries}")

    def get(self, key: str) -> Optional[V]:
        """
        Get a live value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if never set, evicted or stale
        """
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self.misses += 1
                logger.debug(f"Cache miss for key: {key}")
                return None

            if entry.is_stale(self._clock()):
                del self._entries[key]
                if self.allow_stale:
                    self.hits += 1
                    logger.debug(f"Cache hit (stale, dropped) for key: {key}")
                    return entry.value
                self.misses += 1
                logger.debug(f"Cache miss (expired) for key: {key}")
                return None

            self._entries.move_to_end(key)
            self.hits += 1
            logger.debug(f"Cache hit for key: {key}")
            return entry.value

    def set(self, key: str, value: V, ttl_ms: int) -> None:
        """
        Insert or replace an entry.

        Args:
            key: Cache key
            value: Value to cache
            ttl_ms: Time-to-live of this entry in milliseconds
        """
        entry = CacheEntry(value=value, inserted_at=self._clock(), ttl_ms=ttl_ms)

        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted least recently used key: {evicted_key}")
            self._entries[key] = entry

        logger.debug(f"Set cache key {key} with TTL {ttl_ms}ms")

    def delete(self, key: str) -> bool:
        """
        Remove an entry.

        Args:
            key: Cache key

        Returns:
            True if the key was present
        """
        with self._lock:
            if self._entries.pop(key, None) is not None:
                logger.debug(f"Deleted cache key: {key}")
                return True
            return False

    def delete_by_prefix(self, prefix: str) -> int:
        """
        Remove every entry whose key starts with ``prefix``.

        Args:
            prefix: Key prefix

        Returns:
            Number of keys removed
        """
        with self._lock:
            keys_to_delete = [key for key in self._entries if key.startswith(prefix)]
            for key in keys_to_delete:
                del self._entries[key]

        if keys_to_delete:
            logger.debug(f"Deleted {len(keys_to_delete)} keys with prefix '{prefix}'")
        return len(keys_to_delete)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared all {count} keys from cache")
        return count

    def size(self) -> int:
        """Number of stored entries, including stale ones not yet read."""
        with self._lock:
            return len(self._entries)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not entry.is_stale(self._clock())

    def get_stats(self) -> Dict[str, Any]:
        return {
            "size": self.size(),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
        }
