"""Caching resolver - wraps a field resolver with read-through caching.

Resolution of a cached field goes:

    build key -> store hit? -> return cached value
                        \\-> call next resolver -> write through -> return

Values that are not available yet (futures settled later by a
DataLoader batch, coroutines of async resolvers) are handed back to the
executor untouched, with the write-through registered as a continuation.

Known limitations, kept on purpose:

- Falsy cached values (0, "", False, empty lists) read as a miss.
- Concurrent misses on the same key all run the resolver; the last
  write wins.
"""

import asyncio
import functools
import inspect
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fieldcache.core.entities.cache_context import CacheContext
from fieldcache.core.entities.cache_policy import FieldCachePolicy
from fieldcache.core.interfaces.cache_store import ICacheStore
from fieldcache.core.interfaces.key_builder import IKeyBuilder
from fieldcache.core.services.directive_parser import DirectiveParser
from fieldcache.core.services.store_strategy import IStoreStrategy
from fieldcache.core.services.type_cache_key_resolver import TypeCacheKeyResolver

logger = logging.getLogger(__name__)

Resolver = Callable[..., Any]
ViewerIdentity = Callable[[Any], Any]


@dataclass
class CacheStats:
    """Counters shared by the cached fields of a service.

    Resolvers of one service may run on several threads at once, so
    counters are only changed through the ``record_*`` methods.
    """

    hits: int = 0
    misses: int = 0
    writes: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record_hit(self) -> None:
        with self._lock:
            self.hits += 1

    def record_miss(self) -> None:
        with self._lock:
            self.misses += 1

    def record_write(self) -> None:
        with self._lock:
            self.writes += 1

    def as_dict(self) -> dict[str, int]:
        with self._lock:
            return {
                "hits": self.hits,
                "misses": self.misses,
                "writes": self.writes,
                "total": self.hits + self.misses,
            }

    def reset(self) -> None:
        with self._lock:
            self.hits = 0
            self.misses = 0
            self.writes = 0


def then(result: Any, on_settled: Callable[[Any], None]) -> Any:
    """Run ``on_settled`` with a resolver's value once it is available.

    - Futures (asyncio tasks, DataLoader loads) get a done callback and
      are returned as the very same object. The callback only fires for
      a future that finished with a result.
    - Other awaitables are returned as a coroutine awaiting the original.
    - Plain values are passed to ``on_settled`` before being returned.

    Args:
        result: The value returned by a resolver.
        on_settled: Continuation receiving the settled value.

    Returns:
        The result to hand back to the executor.
    """
    if isinstance(result, asyncio.Future):

        def _on_done(future: asyncio.Future) -> None:
            if future.cancelled() or future.exception() is not None:
                return
            on_settled(future.result())

        result.add_done_callback(_on_done)
        return result

    if inspect.isawaitable(result):
        return _settle(result, on_settled)

    on_settled(result)
    return result


async def _settle(awaitable: Any, on_settled: Callable[[Any], None]) -> Any:
    value = await awaitable
    on_settled(value)
    return value


class CachingResolver:
    """A field resolver serving results from a cache store.

    Holds the next resolver of the chain and calls it only on a miss.
    Instances are callable with graphql-core's resolver signature
    ``(parent, info, **args)``.
    """

    def __init__(
        self,
        next_resolver: Resolver,
        policy: FieldCachePolicy,
        *,
        key_builder: IKeyBuilder,
        identity_resolver: TypeCacheKeyResolver,
        store_strategy: IStoreStrategy,
        parser: DirectiveParser,
        viewer: ViewerIdentity,
        stats: CacheStats | None = None,
    ) -> None:
        """Initialize the caching resolver.

        Args:
            next_resolver: The resolver producing the value on a miss.
            policy: The field's maxAge and privacy.
            key_builder: Builds keys and tags from the resolution context.
            identity_resolver: Memoizes the identity field of parent types.
            store_strategy: Picks the plain store or a tag-scoped view.
            parser: Describes parent types for identity resolution.
            viewer: Extracts the viewer identity from the request context.
            stats: Counters to update, shared across resolvers.
        """
        self._next_resolver = next_resolver
        self._policy = policy
        self._key_builder = key_builder
        self._identity_resolver = identity_resolver
        self._store_strategy = store_strategy
        self._parser = parser
        self._viewer = viewer
        self._stats = stats or CacheStats()

    @property
    def next_resolver(self) -> Resolver:
        """Get the wrapped resolver."""
        return self._next_resolver

    @property
    def policy(self) -> FieldCachePolicy:
        """Get the field's cache policy."""
        return self._policy

    def __call__(self, parent: Any, info: Any, **args: Any) -> Any:
        """Resolve the field from the cache, or through the next resolver.

        Raises:
            ConfigurationError: If the parent cannot be identified.
        """
        context = self.build_context(parent, info, args)
        cache_key = self._key_builder.build(context)
        key = str(cache_key)
        store = self._store_strategy.store_for(cache_key)

        cached = store.get(key)
        if cached:
            self._stats.record_hit()
            logger.debug("Field cache hit: %s", key)
            return cached

        self._stats.record_miss()
        logger.debug("Field cache miss: %s", key)

        result = self._next_resolver(parent, info, **args)
        return then(result, functools.partial(self._write_through, store, key))

    def build_context(
        self,
        parent: Any,
        info: Any,
        args: dict[str, Any],
    ) -> CacheContext:
        """Build the cache context of a field resolution.

        Resolves the parent type's identity field on first use.

        Raises:
            ConfigurationError: If the parent type has no identity field.
        """
        parent_type = info.parent_type
        identity = self._identity_resolver.identity_descriptor(
            parent_type.name,
            lambda: self._parser.describe_type(parent_type, info.schema),
        )

        viewer_id = None
        if self._policy.private:
            viewer_id = self._viewer(info.context)

        return CacheContext(
            parent_type=parent_type.name,
            field_name=info.field_name,
            args=args,
            parent=parent,
            identity_field=None if identity is None else identity.attribute,
            private=self._policy.private,
            viewer_id=viewer_id,
            context=info.context,
        )

    def _write_through(self, store: ICacheStore, key: str, value: Any) -> None:
        if self._policy.max_age is not None:
            store.put(key, value, self._policy.max_age)
        else:
            store.forever(key, value)

        self._stats.record_write()
        logger.debug("Field cache write: %s (max age: %s)", key, self._policy.max_age)
