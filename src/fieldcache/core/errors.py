"""Exceptions raised by fieldcache."""


class FieldCacheError(Exception):
    """Base class for fieldcache errors."""


class ConfigurationError(FieldCacheError):
    """Raised when a cached field cannot be scoped to its parent instance.

    Either the parent type declares no usable identity field, or the parent
    value carries no identity value. Both are schema mistakes, not cache
    misses, so they surface as field errors instead of caching under a
    degenerate key.
    """

    def __init__(
        self,
        message: str,
        type_name: str | None = None,
        field_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.field_name = field_name
