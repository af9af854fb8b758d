"""Core domain layer for fieldcache."""

from fieldcache.core.entities import (
    CacheContext,
    CacheKey,
    FieldCacheConfig,
    FieldCachePolicy,
    FieldDescriptor,
    TypeDescriptor,
)
from fieldcache.core.errors import ConfigurationError, FieldCacheError
from fieldcache.core.interfaces import ICacheStore, IKeyBuilder, ISerializer
from fieldcache.core.services import FieldCacheService, TypeCacheKeyResolver

__all__ = [
    # Entities
    "CacheContext",
    "CacheKey",
    "FieldCacheConfig",
    "FieldCachePolicy",
    "FieldDescriptor",
    "TypeDescriptor",
    # Errors
    "ConfigurationError",
    "FieldCacheError",
    # Interfaces
    "ICacheStore",
    "IKeyBuilder",
    "ISerializer",
    # Services
    "FieldCacheService",
    "TypeCacheKeyResolver",
]
