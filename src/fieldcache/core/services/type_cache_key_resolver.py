"""Identity field resolution for cacheable types."""

from collections.abc import Callable

from fieldcache.core.entities.type_descriptor import FieldDescriptor, TypeDescriptor
from fieldcache.core.errors import ConfigurationError


class TypeCacheKeyResolver:
    """Determines which field identifies the instances of a type.

    The result is memoized per type name for the lifetime of the
    resolver, which is meant to match the lifetime of the schema. A type
    without a usable identity field is memoized too, and the same
    ConfigurationError is raised again without rescanning the type.

    Resolution order (first match wins):
    1. The query root type needs no identity, it is a per-request singleton
    2. The first field carrying the ``@cacheKey`` annotation
    3. The first non-null field of the identity scalar type (``ID!``)

    Fields are scanned in declaration order, so schemas evolve predictably.
    """

    def __init__(self, identity_scalar: str = "ID") -> None:
        """Initialize the resolver.

        Args:
            identity_scalar: Name of the scalar type holding identities.
        """
        self._identity_scalar = identity_scalar
        self._cache_keys: dict[str, FieldDescriptor | None] = {}
        self._failures: dict[str, ConfigurationError] = {}

    def resolve_identity_field(self, type_descriptor: TypeDescriptor) -> str | None:
        """Get the name of a type's identity field.

        Args:
            type_descriptor: The type to inspect.

        Returns:
            The identity field name, or None for the query root type.

        Raises:
            ConfigurationError: If the type has no usable identity field.
        """
        field = self.identity_descriptor(type_descriptor.name, lambda: type_descriptor)
        return None if field is None else field.name

    def identity_descriptor(
        self,
        type_name: str,
        describe: Callable[[], TypeDescriptor],
    ) -> FieldDescriptor | None:
        """Get the identity field of a type, describing it only on first use.

        Args:
            type_name: The type name, used as memo key.
            describe: Builds the type's descriptor on a memo miss.

        Returns:
            The identity field descriptor, or None for the query root type.

        Raises:
            ConfigurationError: If the type has no usable identity field.
        """
        if type_name in self._cache_keys:
            return self._cache_keys[type_name]
        if type_name in self._failures:
            failure = self._failures[type_name]
            raise ConfigurationError(
                str(failure),
                type_name=failure.type_name,
                field_name=failure.field_name,
            )

        try:
            field = self._find_identity_field(describe())
        except ConfigurationError as e:
            self._failures[type_name] = e
            raise

        self._cache_keys[type_name] = field
        return field

    def is_resolved(self, type_name: str) -> bool:
        """Check if a type's identity field is already memoized."""
        return type_name in self._cache_keys

    def has_failed(self, type_name: str) -> bool:
        """Check if a type is memoized as having no usable identity field."""
        return type_name in self._failures

    def clear(self) -> None:
        """Forget every memoized identity field and failure."""
        self._cache_keys.clear()
        self._failures.clear()

    def _find_identity_field(
        self, type_descriptor: TypeDescriptor
    ) -> FieldDescriptor | None:
        if type_descriptor.is_query_root:
            return None

        for field in type_descriptor.fields:
            if field.has_cache_key:
                return field

        for field in type_descriptor.fields:
            if (
                field.non_null
                and not field.is_list
                and field.type_name == self._identity_scalar
            ):
                return field

        raise ConfigurationError(
            f"No @cacheKey or {self._identity_scalar}! field defined "
            f"on {type_descriptor.name}",
            type_name=type_descriptor.name,
        )
