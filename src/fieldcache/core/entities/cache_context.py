"""Per-resolution cache context entity."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CacheContext:
    """Inputs of a single field resolution, as seen by the key builder.

    Created fresh for every field occurrence and dropped once the
    resolver's value is written (or, for pending values, once it settles).

    Attributes:
        parent_type: Name of the parent object type.
        field_name: Name of the field being resolved.
        args: Field arguments as received by the resolver.
        parent: The parent value (None at the query root).
        identity_field: The parent type's identity field, or None when
            the parent type is the query root.
        private: Whether the field is declared private.
        viewer_id: Identity of the current viewer, None when anonymous.
        context: The request context handle.
    """

    parent_type: str
    field_name: str
    args: Mapping[str, Any] = field(default_factory=dict)
    parent: Any = None
    identity_field: str | None = None
    private: bool = False
    viewer_id: Any = None
    context: Any = None

    @property
    def is_root(self) -> bool:
        """Check if the field hangs off the query root (no instance scoping)."""
        return self.identity_field is None

    @property
    def scoped_to_viewer(self) -> bool:
        """Check if the entry is isolated per viewer.

        Private fields resolved anonymously share the public entry.
        """
        return self.private and self.viewer_id is not None
