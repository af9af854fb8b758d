"""Key builder interface."""

from typing import Protocol

from fieldcache.core.entities.cache_context import CacheContext
from fieldcache.core.entities.cache_key import CacheKey


class IKeyBuilder(Protocol):
    """Contract for building field cache keys from a resolution context.

    Key builders must be deterministic: semantically equal contexts yield
    equal keys, and any difference in parent identity, field, arguments
    or viewer scope yields a different key.
    """

    def build(self, context: CacheContext) -> CacheKey:
        """Build the structured cache key, tags included.

        Args:
            context: The resolution context.

        Returns:
            The CacheKey for the context.
        """
        ...

    def build_key(self, context: CacheContext) -> str:
        """Build the cache key string for a resolution context."""
        ...

    def build_tags(self, context: CacheContext) -> list[str]:
        """Build the tags grouping the entry for bulk invalidation."""
        ...

    def type_tag(self, type_name: str, identity: object | None = None) -> str:
        """Build the tag shared by all entries of a type (instance)."""
        ...

    def field_tag(self, type_name: str, field_name: str) -> str:
        """Build the tag shared by all entries of a type's field."""
        ...
