"""Cache key value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheKey:
    """Immutable field cache key value object.

    Encapsulates the components of a field cache key, providing a
    structured representation before it is rendered to a string.
    Every component is already encoded as a colon-free segment.
    """

    prefix: str
    field_name: str
    parent_type: str | None = None
    parent_id: str | None = None
    args_hash: str | None = None
    viewer_id: str | None = None
    tags: tuple[str, ...] = ()

    def __str__(self) -> str:
        """Return the full cache key string.

        Layout: ``prefix:field[:u:viewer][:t:Type:id]:f:name[:a:hash]``.
        Each optional part carries its own marker, so keys with and
        without a part can never collide.
        """
        parts = [self.prefix, "field"]
        if self.viewer_id is not None:
            parts.extend(["u", self.viewer_id])
        if self.parent_type is not None:
            parts.extend(["t", self.parent_type, self.parent_id or ""])
        parts.extend(["f", self.field_name])
        if self.args_hash is not None:
            parts.extend(["a", self.args_hash])
        return ":".join(parts)

    @property
    def is_root(self) -> bool:
        """Check if the key belongs to a query root field."""
        return self.parent_type is None
