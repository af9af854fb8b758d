"""Field cache service - main entry point for field-level caching."""

import logging
from typing import Any

from graphql import GraphQLSchema

from fieldcache.core.entities.cache_config import FieldCacheConfig
from fieldcache.core.entities.cache_policy import FieldCachePolicy
from fieldcache.core.interfaces.cache_store import ICacheStore, supports_tags
from fieldcache.core.interfaces.key_builder import IKeyBuilder
from fieldcache.core.services.caching_resolver import (
    CacheStats,
    CachingResolver,
    Resolver,
    ViewerIdentity,
)
from fieldcache.core.services.directive_parser import DirectiveParser, SchemaDirectives
from fieldcache.core.services.store_strategy import (
    IStoreStrategy,
    select_store_strategy,
)
from fieldcache.core.services.type_cache_key_resolver import TypeCacheKeyResolver
from fieldcache.core.services.viewer import default_viewer_identity

logger = logging.getLogger(__name__)


class FieldCacheService:
    """Domain service that orchestrates field caching.

    Composes the store, key builder and identity resolution, and hands
    out caching resolvers. Create one service per schema: the memoized
    identity fields are only valid for the schema they were read from.
    """

    def __init__(
        self,
        store: ICacheStore,
        key_builder: IKeyBuilder,
        config: FieldCacheConfig | None = None,
        viewer: ViewerIdentity | None = None,
    ) -> None:
        """Initialize the field cache service.

        Args:
            store: The cache store.
            key_builder: The key builder for field cache keys and tags.
            config: Optional configuration. Uses defaults if not provided.
            viewer: Extracts the viewer identity from the request context.
                Defaults to reading ``user.id``.
        """
        self._store = store
        self._key_builder = key_builder
        self._config = config or FieldCacheConfig()
        self._viewer = viewer or default_viewer_identity

        self._parser = DirectiveParser(self._config)
        self._identity_resolver = TypeCacheKeyResolver(
            identity_scalar=self._config.identity_scalar
        )
        self._store_strategy = select_store_strategy(store, self._config.use_tags)
        self._stats = CacheStats()

    @property
    def config(self) -> FieldCacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def store(self) -> ICacheStore:
        """Get the cache store."""
        return self._store

    @property
    def key_builder(self) -> IKeyBuilder:
        """Get the key builder."""
        return self._key_builder

    @property
    def parser(self) -> DirectiveParser:
        """Get the directive parser."""
        return self._parser

    @property
    def identity_resolver(self) -> TypeCacheKeyResolver:
        """Get the identity field resolver."""
        return self._identity_resolver

    @property
    def store_strategy(self) -> IStoreStrategy:
        """Get the store strategy selected for this service."""
        return self._store_strategy

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, misses, writes, and total lookups.
        """
        return self._stats.as_dict()

    def wrap_resolver(
        self,
        resolver: Resolver,
        max_age: int | None = None,
        private: bool = False,
    ) -> Resolver:
        """Wrap a field resolver with caching.

        The returned resolver must be the outermost wrapper of the field,
        so that a hit short-circuits every other middleware.

        Args:
            resolver: The field resolver.
            max_age: Seconds until entries expire. None stores forever.
            private: Scope entries to the current viewer.

        Returns:
            The caching resolver, or the resolver itself when caching
            is disabled.

        Raises:
            ConfigurationError: If max_age is not a positive integer.
        """
        return self.wrap(resolver, FieldCachePolicy(max_age=max_age, private=private))

    def wrap(self, resolver: Resolver, policy: FieldCachePolicy) -> Resolver:
        """Wrap a field resolver with caching under an existing policy."""
        if not self._config.enabled:
            return resolver

        return CachingResolver(
            resolver,
            policy,
            key_builder=self._key_builder,
            identity_resolver=self._identity_resolver,
            store_strategy=self._store_strategy,
            parser=self._parser,
            viewer=self._viewer,
            stats=self._stats,
        )

    def validate_schema(self, schema: GraphQLSchema) -> SchemaDirectives:
        """Resolve the identity field of every type owning a cached field.

        Surfaces configuration errors at schema build time instead of on
        the first request.

        Args:
            schema: The graphql-core schema.

        Returns:
            The parsed field cache directives.

        Raises:
            ConfigurationError: If a type has no usable identity field.
        """
        directives = self._parser.parse_schema(schema)

        for type_name in sorted(directives.cached_types):
            object_type: Any = schema.get_type(type_name)
            self._identity_resolver.identity_descriptor(
                type_name,
                lambda: self._parser.describe_type(object_type, schema),
            )

        return directives

    def invalidate(
        self,
        type_name: str,
        identity: Any | None = None,
        field_name: str | None = None,
    ) -> bool:
        """Invalidate a group of entries by flushing its tag.

        Without field_name, flushes every entry of the type instance
        (or, for root types, every entry of the type). With field_name,
        flushes every entry of that field on the type.

        Args:
            type_name: The parent type name.
            identity: The instance identity, ignored with field_name.
            field_name: The field name.

        Returns:
            True if a tag was flushed, False if entries are not tagged.
        """
        if not self._store_strategy.uses_tags or not supports_tags(self._store):
            logger.warning(
                "Cannot invalidate %s: field entries are not stored with tags",
                type_name,
            )
            return False

        if field_name is not None:
            tag = self._key_builder.field_tag(type_name, field_name)
        else:
            tag = self._key_builder.type_tag(type_name, identity)

        self._store.tags([tag]).flush()  # type: ignore[attr-defined]
        return True

    def reset_stats(self) -> None:
        """Reset hit, miss and write counters."""
        self._stats.reset()
