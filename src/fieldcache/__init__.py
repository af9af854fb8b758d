"""fieldcache - Field-level result caching for GraphQL resolvers.

A Python library caching the result of individual GraphQL fields under
keys derived from the parent instance, the field, its arguments and,
for private fields, the viewer. Works with sync resolvers, async
resolvers and DataLoader futures, with in-memory and Redis stores and
adapters for graphql-core, Ariadne and Strawberry.

Example with Ariadne:
    from ariadne import ObjectType, make_executable_schema
    from fieldcache import (
        CACHE_DIRECTIVE_SDL,
        DefaultKeyBuilder,
        FieldCacheConfig,
        FieldCacheService,
        InMemoryCacheStore,
    )
    from fieldcache.adapters.ariadne import make_cache_directive

    type_defs = CACHE_DIRECTIVE_SDL + '''
        type Query {
            posts: [Post!]! @cache(maxAge: 60)
        }

        type Post {
            uuid: String! @cacheKey
            title: String! @cache(maxAge: 30)
            likedByMe: Boolean! @cache(private: true)
        }
    '''

    service = FieldCacheService(
        store=InMemoryCacheStore(),
        key_builder=DefaultKeyBuilder(),
        config=FieldCacheConfig(use_tags=True),
    )

    schema = make_executable_schema(
        type_defs,
        query,
        post,
        directives={"cache": make_cache_directive(service)},
    )

Bulk invalidation (tag-enabled stores only):
    service.invalidate("Post", identity="p1")
    service.invalidate("Post", field_name="title")
"""

from fieldcache.core.entities import (
    CacheContext,
    CacheKey,
    FieldCacheConfig,
    FieldCachePolicy,
    FieldDescriptor,
    TypeDescriptor,
)
from fieldcache.core.errors import ConfigurationError, FieldCacheError
from fieldcache.core.interfaces import (
    ICacheStore,
    IKeyBuilder,
    ISerializer,
    ITaggableCacheStore,
    supports_tags,
)
from fieldcache.core.services import (
    CACHE_DIRECTIVE_SDL,
    CachingResolver,
    DirectiveParser,
    FieldCacheService,
    SchemaDirectives,
    TypeCacheKeyResolver,
    default_viewer_identity,
    get_cache_directives_sdl,
)
from fieldcache.decorators import cached, configure
from fieldcache.infrastructure import (
    DefaultKeyBuilder,
    InMemoryCacheStore,
    JsonSerializer,
    TaggedCache,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheContext",
    "CacheKey",
    "FieldCacheConfig",
    "FieldCachePolicy",
    "FieldDescriptor",
    "TypeDescriptor",
    # Errors
    "ConfigurationError",
    "FieldCacheError",
    # Core interfaces
    "ICacheStore",
    "ITaggableCacheStore",
    "IKeyBuilder",
    "ISerializer",
    "supports_tags",
    # Core services
    "FieldCacheService",
    "CachingResolver",
    "TypeCacheKeyResolver",
    "default_viewer_identity",
    # Directive parsing
    "DirectiveParser",
    "SchemaDirectives",
    "CACHE_DIRECTIVE_SDL",
    "get_cache_directives_sdl",
    # Infrastructure implementations
    "InMemoryCacheStore",
    "TaggedCache",
    "DefaultKeyBuilder",
    "JsonSerializer",
    # Decorators
    "cached",
    "configure",
]
