"""In-memory cache store implementation."""

import math
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from cachetools import TLRUCache  # type: ignore[import-untyped]

from fieldcache.infrastructure.stores.tagged import TaggedCache


@dataclass(frozen=True)
class _StoredValue:
    value: Any
    ttl: int | None


def _time_to_use(key: str, item: _StoredValue, now: float) -> float:
    if item.ttl is None:
        return math.inf
    return now + item.ttl


class InMemoryCacheStore:
    """In-memory cache store using LRU with per-item TTL.

    Suitable for single-process deployments. Uses cachetools'
    TLRUCache so that every entry carries its own expiry; entries
    stored forever only leave through LRU eviction once ``maxsize``
    is reached. Access is serialized with a lock, since cachetools
    caches are not thread-safe.
    """

    def __init__(
        self,
        maxsize: int = 10000,
        timer: Any = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache store.

        Args:
            maxsize: Maximum number of items in the cache.
            timer: Clock used for expiry, in seconds.
        """
        self._maxsize = maxsize
        self._cache: TLRUCache[str, _StoredValue] = TLRUCache(
            maxsize=maxsize,
            ttu=_time_to_use,
            timer=timer,
        )
        self._lock = threading.RLock()

    def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        with self._lock:
            item = self._cache.get(key)
        return None if item is None else item.value

    def put(self, key: str, value: Any, ttl: int) -> None:
        """Store value that expires ``ttl`` seconds from now.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Time-to-live in seconds.
        """
        with self._lock:
            self._cache[key] = _StoredValue(value=value, ttl=ttl)

    def forever(self, key: str, value: Any) -> None:
        """Store value without expiry.

        Args:
            key: The cache key.
            value: The value to store.
        """
        with self._lock:
            self._cache[key] = _StoredValue(value=value, ttl=None)

    def tags(self, names: Sequence[str]) -> TaggedCache:
        """Return a view of this store scoped to the given tags."""
        return TaggedCache(self, names)

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        with self._lock:
            try:
                del self._cache[key]
                return True
            except KeyError:
                return False

    def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        """Return the number of items in the cache."""
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
