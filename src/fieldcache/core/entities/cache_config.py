"""Field cache configuration entity."""

from dataclasses import dataclass


@dataclass
class FieldCacheConfig:
    """Field cache configuration.

    Shared by every cached field of a schema. Per-field settings
    (maxAge, private) live in FieldCachePolicy instead.

    Tags:
        When use_tags=True and the store exposes a ``tags()`` method,
        every entry is written through a tag-scoped view of the store so
        it can be flushed later per type instance or per type field.
        Stores without tag support silently fall back to plain keys.
    """

    enabled: bool = True

    # Tag-scoped storage for bulk invalidation
    use_tags: bool = False

    # Schema conventions
    identity_scalar: str = "ID"
    cache_directive: str = "cache"
    cache_key_directive: str = "cacheKey"
