"""graphql-core adapter for fieldcache."""

from fieldcache.adapters.graphql.middleware import FieldCacheMiddleware
from fieldcache.adapters.graphql.schema import apply_field_cache

__all__ = [
    "FieldCacheMiddleware",
    "apply_field_cache",
]
