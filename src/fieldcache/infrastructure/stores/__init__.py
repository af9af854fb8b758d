"""Cache store implementations.

RedisCacheStore lives in ``fieldcache.infrastructure.stores.redis`` and
needs the ``redis`` extra.
"""

from fieldcache.infrastructure.stores.memory import InMemoryCacheStore
from fieldcache.infrastructure.stores.tagged import TaggedCache

__all__ = [
    "InMemoryCacheStore",
    "TaggedCache",
]
