"""Store selection strategies: tag-scoped or plain."""

import logging
from typing import Any, Protocol

from fieldcache.core.entities.cache_key import CacheKey
from fieldcache.core.interfaces.cache_store import ICacheStore, supports_tags

logger = logging.getLogger(__name__)


class IStoreStrategy(Protocol):
    """Picks the store a field entry is read from and written to."""

    uses_tags: bool

    def store_for(self, cache_key: CacheKey) -> ICacheStore:
        """Get the store for an entry.

        Args:
            cache_key: The entry's structured key.

        Returns:
            The store (or store view) to use.
        """
        ...


class PlainStoreStrategy:
    """Reads and writes every entry through the store itself."""

    uses_tags = False

    def __init__(self, store: ICacheStore) -> None:
        self._store = store

    def store_for(self, cache_key: CacheKey) -> ICacheStore:
        return self._store


class TaggedStoreStrategy:
    """Reads and writes every entry through a view scoped to its tags."""

    uses_tags = True

    def __init__(self, store: Any) -> None:
        self._store = store

    def store_for(self, cache_key: CacheKey) -> ICacheStore:
        return self._store.tags(list(cache_key.tags))


def select_store_strategy(store: ICacheStore, use_tags: bool) -> IStoreStrategy:
    """Select the store strategy once, from configuration and store capability.

    Args:
        store: The cache store.
        use_tags: Whether tag-scoped storage is configured.

    Returns:
        TaggedStoreStrategy if tags are configured and supported by the
        store, PlainStoreStrategy otherwise.
    """
    if use_tags and supports_tags(store):
        return TaggedStoreStrategy(store)

    if use_tags:
        logger.warning(
            "Cache tags are enabled but %s does not support tags; "
            "storing field entries without tags",
            type(store).__name__,
        )

    return PlainStoreStrategy(store)
