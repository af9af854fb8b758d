"""Core interfaces (Protocol classes) for fieldcache."""

from fieldcache.core.interfaces.cache_store import (
    ICacheStore,
    ITaggableCacheStore,
    ITaggedCacheStore,
    supports_tags,
)
from fieldcache.core.interfaces.key_builder import IKeyBuilder
from fieldcache.core.interfaces.serializer import ISerializer

__all__ = [
    "ICacheStore",
    "ITaggableCacheStore",
    "ITaggedCacheStore",
    "IKeyBuilder",
    "ISerializer",
    "supports_tags",
]
