"""Strawberry framework adapter for fieldcache."""

from fieldcache.adapters.strawberry.directives import Cache, CacheIdentity
from fieldcache.adapters.strawberry.extension import FieldCacheExtension

__all__ = [
    "Cache",
    "CacheIdentity",
    "FieldCacheExtension",
]
