"""Schema type metadata consumed by the identity field resolver."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldDescriptor:
    """A field of an object type, reduced to what cache scoping needs.

    Attributes:
        name: The field name.
        type_name: Name of the field's named (unwrapped) type.
        non_null: Whether the outermost type is non-null.
        is_list: Whether the field returns a list.
        has_cache_key: Whether the field carries the ``@cacheKey`` annotation.
        python_name: Attribute holding the value on parent objects, when
            it differs from the GraphQL name.
    """

    name: str
    type_name: str
    non_null: bool = False
    is_list: bool = False
    has_cache_key: bool = False
    python_name: str | None = None

    @property
    def attribute(self) -> str:
        """Get the name to read the field's value off a parent object."""
        return self.python_name or self.name


@dataclass(frozen=True)
class TypeDescriptor:
    """An object type with its fields in declaration order."""

    name: str
    fields: tuple[FieldDescriptor, ...] = ()
    is_query_root: bool = False

    def field(self, name: str) -> FieldDescriptor | None:
        """Look up a field by name."""
        for field_descriptor in self.fields:
            if field_descriptor.name == name:
                return field_descriptor
        return None
