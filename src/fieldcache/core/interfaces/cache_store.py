"""Cache store interfaces."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


class ICacheStore(Protocol):
    """Contract for field cache stores.

    Methods are synchronous so that cached fields work in both
    ``graphql_sync`` and async execution. The store owns expiry,
    eviction and persistence; it must be safe to share between requests.
    """

    def get(self, key: str) -> Any | None:
        """Retrieve a cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    def put(self, key: str, value: Any, ttl: int) -> None:
        """Store a value that expires ``ttl`` seconds from now.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Time-to-live in seconds.
        """
        ...

    def forever(self, key: str, value: Any) -> None:
        """Store a value without expiry.

        Args:
            key: The cache key.
            value: The value to store.
        """
        ...


@runtime_checkable
class ITaggableCacheStore(ICacheStore, Protocol):
    """A cache store that can hand out tag-scoped views of itself."""

    def tags(self, names: Sequence[str]) -> "ITaggedCacheStore":
        """Return a view of the store scoped to the given tags.

        Args:
            names: Tag names grouping the entries written through the view.

        Returns:
            A tag-scoped store.
        """
        ...


class ITaggedCacheStore(ICacheStore, Protocol):
    """A tag-scoped store view."""

    def flush(self) -> None:
        """Invalidate every entry written under any of the view's tags."""
        ...


def supports_tags(store: Any) -> bool:
    """Check if a store exposes tag-scoped views.

    Args:
        store: Any cache store.

    Returns:
        True if the store has a callable ``tags`` method.
    """
    return callable(getattr(store, "tags", None))
