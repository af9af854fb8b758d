"""Infrastructure layer implementations for fieldcache."""

from fieldcache.infrastructure.key_builders import DefaultKeyBuilder
from fieldcache.infrastructure.serializers import JsonSerializer
from fieldcache.infrastructure.stores import InMemoryCacheStore, TaggedCache

__all__ = [
    "DefaultKeyBuilder",
    "InMemoryCacheStore",
    "JsonSerializer",
    "TaggedCache",
]
