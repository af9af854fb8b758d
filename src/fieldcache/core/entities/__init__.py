"""Domain entities for fieldcache."""

from fieldcache.core.entities.cache_config import FieldCacheConfig
from fieldcache.core.entities.cache_context import CacheContext
from fieldcache.core.entities.cache_key import CacheKey
from fieldcache.core.entities.cache_policy import FieldCachePolicy
from fieldcache.core.entities.type_descriptor import FieldDescriptor, TypeDescriptor

__all__ = [
    "CacheContext",
    "CacheKey",
    "FieldCacheConfig",
    "FieldCachePolicy",
    "FieldDescriptor",
    "TypeDescriptor",
]
