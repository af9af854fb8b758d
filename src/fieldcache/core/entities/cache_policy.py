"""Per-field cache policy entity."""

from dataclasses import dataclass
from typing import Any

from fieldcache.core.errors import ConfigurationError


@dataclass(frozen=True)
class FieldCachePolicy:
    """Caching policy of a single field, as declared by ``@cache``.

    Attributes:
        max_age: Expiry in seconds, measured from the write. None stores
            the value forever (subject only to the store's own eviction).
        private: Scope entries to the current viewer. Has no effect for
            anonymous requests, which share the public entry.
    """

    max_age: int | None = None
    private: bool = False

    def __post_init__(self) -> None:
        """Reject max ages that are not positive integers."""
        if self.max_age is None:
            return
        if isinstance(self.max_age, bool) or not isinstance(self.max_age, int):
            raise ConfigurationError(
                f"maxAge must be a positive integer, got {self.max_age!r}"
            )
        if self.max_age <= 0:
            raise ConfigurationError(
                f"maxAge must be a positive integer, got {self.max_age}"
            )

    @property
    def expires(self) -> bool:
        """Check if entries written under this policy expire."""
        return self.max_age is not None

    @classmethod
    def from_directive(
        cls,
        max_age: int | None = None,
        private: bool | None = None,
    ) -> "FieldCachePolicy":
        """Create a policy from ``@cache`` directive arguments.

        Args:
            max_age: The maxAge argument, if given.
            private: The private argument; None means the SDL default (false).

        Returns:
            A new FieldCachePolicy instance.
        """
        return cls(max_age=max_age, private=bool(private))

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "FieldCachePolicy":
        """Create a policy from a code-first extensions mapping.

        Accepts both the SDL spelling (``maxAge``) and the Python one
        (``max_age``).
        """
        max_age = data.get("max_age", data.get("maxAge"))
        return cls.from_directive(max_age=max_age, private=data.get("private"))
