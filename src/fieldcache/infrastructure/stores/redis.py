"""Redis cache store implementation."""

from collections.abc import Sequence
from typing import Any, Optional

import redis

from fieldcache.core.interfaces.serializer import ISerializer
from fieldcache.infrastructure.serializers.json import JsonSerializer
from fieldcache.infrastructure.stores.tagged import TaggedCache


class RedisCacheStore:
    """Redis cache store for distributed deployments.

    Supports per-key TTL and tag-scoped views, and is suitable for
    multi-process and distributed deployments. Uses the synchronous
    client, since field resolution may run outside an event loop.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "fieldcache",
        serializer: Optional[ISerializer] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_url: Redis connection URL, used when no client is given.
            key_prefix: Prefix for all cache keys.
            serializer: Serializer for stored values. Defaults to JSON.
            client: An existing Redis client.
        """
        self._redis: redis.Redis = client or redis.Redis.from_url(redis_url)
        self._key_prefix = key_prefix
        self._serializer = serializer or JsonSerializer()

    def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The deserialized value, or None if not found or expired.
        """
        data = self._redis.get(self._prefixed_key(key))
        if data is None:
            return None
        return self._serializer.deserialize(data)

    def put(self, key: str, value: Any, ttl: int) -> None:
        """Store value that expires ``ttl`` seconds from now.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Time-to-live in seconds.
        """
        self._redis.setex(
            self._prefixed_key(key), ttl, self._serializer.serialize(value)
        )

    def forever(self, key: str, value: Any) -> None:
        """Store value without expiry.

        Args:
            key: The cache key.
            value: The value to store.
        """
        self._redis.set(self._prefixed_key(key), self._serializer.serialize(value))

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
        result = self._redis.delete(self._prefixed_key(key))
        return result > 0

    def clear(self) -> int:
        """Clear all cached values with our prefix.

        Note: This only clears keys with our prefix, not the entire Redis DB.

        Returns:
            Number of keys deleted.
        """
        count = 0
        cursor = 0
        pattern = f"{self._key_prefix}:*"

        while True:
            cursor, keys = self._redis.scan(cursor, match=pattern, count=100)

            if keys:
                count += self._redis.delete(*keys)

            if cursor == 0:
                break

        return count

    def _prefixed_key(self, key: str) -> str:
        """Add prefix to key if not already present."""
        if key.startswith(f"{self._key_prefix}:"):
            return key
        return f"{self._key_prefix}:{key}"

    def close(self) -> None:
        """Close the Redis connection."""
        self._redis.close()

    def __enter__(self) -> "RedisCacheStore":
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        self.close()
