"""Domain services for fieldcache."""

from fieldcache.core.services.caching_resolver import CacheStats, CachingResolver, then
from fieldcache.core.services.directive_parser import (
    CACHE_DIRECTIVE_SDL,
    DirectiveParser,
    SchemaDirectives,
    get_cache_directives_sdl,
)
from fieldcache.core.services.field_cache_service import FieldCacheService
from fieldcache.core.services.store_strategy import (
    PlainStoreStrategy,
    TaggedStoreStrategy,
    select_store_strategy,
)
from fieldcache.core.services.type_cache_key_resolver import TypeCacheKeyResolver
from fieldcache.core.services.viewer import default_viewer_identity

__all__ = [
    "FieldCacheService",
    "CachingResolver",
    "CacheStats",
    "then",
    "TypeCacheKeyResolver",
    # Store selection
    "PlainStoreStrategy",
    "TaggedStoreStrategy",
    "select_store_strategy",
    # Directive parsing
    "DirectiveParser",
    "SchemaDirectives",
    "CACHE_DIRECTIVE_SDL",
    "get_cache_directives_sdl",
    # Viewer
    "default_viewer_identity",
]
