"""Default field key builder implementation."""

from collections.abc import Mapping
from typing import Any

from fieldcache.core.entities.cache_context import CacheContext
from fieldcache.core.entities.cache_key import CacheKey
from fieldcache.core.errors import ConfigurationError
from fieldcache.utils.hashing import hash_value, key_segment


class DefaultKeyBuilder:
    """Default key builder for field-level caching.

    Creates deterministic keys from the parent type and instance identity,
    the field name, a SHA-256 hash of the canonicalized arguments, and the
    viewer identity for private fields.
    """

    def __init__(
        self,
        prefix: str = "fieldcache",
        hash_length: int = 32,
    ) -> None:
        """Initialize the key builder.

        Args:
            prefix: Prefix for all cache keys and tags.
            hash_length: Hex characters kept from the argument hash.
        """
        self._prefix = prefix
        self._hash_length = hash_length

    @property
    def prefix(self) -> str:
        """Get the key prefix."""
        return self._prefix

    def build(self, context: CacheContext) -> CacheKey:
        """Build the structured cache key for a field resolution.

        Args:
            context: The resolution context.

        Returns:
            The CacheKey, tags included.

        Raises:
            ConfigurationError: If a non-root parent has no identity value.
        """
        identity = None
        if not context.is_root:
            identity = self.identity_value(context)

        args_hash = None
        if context.args:
            args_hash = hash_value(dict(context.args), length=self._hash_length)

        viewer_id = None
        if context.scoped_to_viewer:
            viewer_id = key_segment(context.viewer_id)

        tags = (
            self.type_tag(context.parent_type, identity),
            self.field_tag(context.parent_type, context.field_name),
        )

        return CacheKey(
            prefix=self._prefix,
            field_name=context.field_name,
            parent_type=None if context.is_root else context.parent_type,
            parent_id=None if identity is None else key_segment(identity),
            args_hash=args_hash,
            viewer_id=viewer_id,
            tags=tags,
        )

    def build_key(self, context: CacheContext) -> str:
        """Build the cache key string for a field resolution."""
        return str(self.build(context))

    def build_tags(self, context: CacheContext) -> list[str]:
        """Build the invalidation tags for a field resolution."""
        return list(self.build(context).tags)

    def type_tag(self, type_name: str, identity: Any | None = None) -> str:
        """Build the tag shared by every entry of a type instance.

        Args:
            type_name: The parent type name.
            identity: The instance identity; None for root types.

        Returns:
            The tag string.
        """
        parts = [self._prefix, "t", type_name]
        if identity is not None:
            parts.append(key_segment(identity))
        return ":".join(parts)

    def field_tag(self, type_name: str, field_name: str) -> str:
        """Build the tag shared by every entry of a field on a type."""
        return ":".join([self._prefix, "f", type_name, field_name])

    def identity_value(self, context: CacheContext) -> Any:
        """Read the identity value off the parent object.

        Supports mappings (``parent[field]``) and plain objects
        (``parent.field``).

        Raises:
            ConfigurationError: If the value is absent or empty.
        """
        parent = context.parent
        field = context.identity_field or ""

        if isinstance(parent, Mapping):
            value = parent.get(field)
        else:
            value = getattr(parent, field, None)

        if value is None or value == "":
            raise ConfigurationError(
                f"Cannot cache {context.parent_type}.{context.field_name}: "
                f"the parent {context.parent_type} has no value for its "
                f"identity field '{field}'",
                type_name=context.parent_type,
                field_name=field,
            )
        return value
