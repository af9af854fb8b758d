"""Framework-agnostic field cache decorators.

These decorators cache resolvers with the graphql-core signature
``(parent, info, **args)``, which both Ariadne and plain graphql-core
resolvers use. They rely on a module-level FieldCacheService set with
``configure()``.
"""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from fieldcache.core.entities.cache_policy import FieldCachePolicy
from fieldcache.core.services.field_cache_service import FieldCacheService

F = TypeVar("F", bound=Callable[..., Any])

# Module-level field cache service reference
_field_cache: FieldCacheService | None = None


def configure(service: FieldCacheService) -> None:
    """Configure the field cache service for decorators.

    Must be called before cached resolvers run; until then they
    resolve without caching.

    Args:
        service: The field cache service instance to use.

    Example:
        service = FieldCacheService(
            store=InMemoryCacheStore(),
            key_builder=DefaultKeyBuilder(),
        )
        configure(service)
    """
    global _field_cache
    _field_cache = service


def get_field_cache() -> FieldCacheService | None:
    """Get the configured field cache service.

    Returns:
        The configured service, or None if not configured.
    """
    return _field_cache


def cached(
    max_age: int | None = None,
    private: bool = False,
) -> Callable[[F], F]:
    """Decorator caching a field resolver's results.

    Works for sync resolvers and for async ones, whose coroutine is
    awaited by the executor before the value is written.

    Args:
        max_age: Seconds until entries expire. None stores forever.
        private: Scope entries to the current viewer.

    Returns:
        Decorated resolver.

    Raises:
        ConfigurationError: If max_age is not a positive integer.

    Example:
        @post.field("title")
        @cached(max_age=30)
        def resolve_title(post, info):
            return post.title
    """
    policy = FieldCachePolicy(max_age=max_age, private=private)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(parent: Any, info: Any, **kwargs: Any) -> Any:
            if _field_cache is None:
                # Cache not configured, resolve directly
                return func(parent, info, **kwargs)

            return _field_cache.wrap(func, policy)(parent, info, **kwargs)

        return wrapper  # type: ignore

    return decorator
