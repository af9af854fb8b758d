"""Parser for @cache and @cacheKey directives in GraphQL schemas.

Extracts field cache policies and identity annotations from graphql-core
schemas, whether they were built from SDL (directives on AST nodes),
in code (field ``extensions``), or by Strawberry (directive instances on
the field definitions).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from graphql import (
    GraphQLField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    get_named_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    value_from_ast_untyped,
)

from fieldcache.core.entities.cache_config import FieldCacheConfig
from fieldcache.core.entities.cache_policy import FieldCachePolicy
from fieldcache.core.entities.type_descriptor import FieldDescriptor, TypeDescriptor

# Definitions of the directives to add to SDL schemas
CACHE_DIRECTIVE_SDL = '''
"""Cache the result of a resolver."""
directive @cache(
  """
  Seconds until the cached value expires.
  If not given, the result will be stored forever.
  """
  maxAge: Int
  """
  Limit access to cached data to the current viewer.
  Guests share the public cache, this has no effect for them.
  """
  private: Boolean = false
) on FIELD_DEFINITION

"""Use this field's value as the identity of its type's instances in cache keys."""
directive @cacheKey on FIELD_DEFINITION
'''

# Key of Strawberry's field definition in graphql-core field extensions
STRAWBERRY_DEFINITION = "strawberry-definition"


@dataclass
class SchemaDirectives:
    """Field cache policies extracted from a schema."""

    # "TypeName.fieldName" -> FieldCachePolicy
    field_policies: dict[str, FieldCachePolicy] = field(default_factory=dict)

    def get_policy(self, type_name: str, field_name: str) -> FieldCachePolicy | None:
        """Get the cache policy of a field.

        Args:
            type_name: The parent type name.
            field_name: The field name.

        Returns:
            The FieldCachePolicy, or None if the field is not cached.
        """
        return self.field_policies.get(f"{type_name}.{field_name}")

    @property
    def cached_types(self) -> set[str]:
        """Get the names of types owning at least one cached field."""
        return {key.split(".", 1)[0] for key in self.field_policies}

    def __len__(self) -> int:
        return len(self.field_policies)


class DirectiveParser:
    """Parser for extracting field cache directives from GraphQL schemas."""

    def __init__(self, config: FieldCacheConfig | None = None) -> None:
        """Initialize the directive parser.

        Args:
            config: Provides the directive names. Uses defaults if not provided.
        """
        self._config = config or FieldCacheConfig()

    def parse_schema(self, schema: GraphQLSchema) -> SchemaDirectives:
        """Parse a GraphQL schema and extract field cache policies.

        Args:
            schema: The graphql-core schema.

        Returns:
            SchemaDirectives holding every cached field's policy.
        """
        directives = SchemaDirectives()

        for type_name, type_def in schema.type_map.items():
            # Skip introspection types
            if type_name.startswith("__") or not is_object_type(type_def):
                continue

            for field_name, field_def in type_def.fields.items():
                policy = self.field_policy(field_def)
                if policy is not None:
                    directives.field_policies[f"{type_name}.{field_name}"] = policy

        return directives

    def describe_type(
        self,
        object_type: GraphQLObjectType,
        schema: GraphQLSchema | None = None,
    ) -> TypeDescriptor:
        """Build the descriptor used to pick a type's identity field.

        Args:
            object_type: The object type.
            schema: The schema, used to tell whether the type is the query root.

        Returns:
            A TypeDescriptor with fields in declaration order.
        """
        fields = []
        for field_name, field_def in object_type.fields.items():
            field_type = field_def.type
            non_null = is_non_null_type(field_type)
            inner = field_type.of_type if non_null else field_type
            named: GraphQLNamedType = get_named_type(field_type)
            definition = _extensions(field_def).get(STRAWBERRY_DEFINITION)

            fields.append(
                FieldDescriptor(
                    name=field_name,
                    type_name=named.name,
                    non_null=non_null,
                    is_list=is_list_type(inner),
                    has_cache_key=self.has_cache_key(field_def),
                    python_name=getattr(definition, "python_name", None),
                )
            )

        query_type = schema.query_type if schema is not None else None
        return TypeDescriptor(
            name=object_type.name,
            fields=tuple(fields),
            is_query_root=query_type is not None and query_type.name == object_type.name,
        )

    def field_policy(self, field_def: GraphQLField) -> FieldCachePolicy | None:
        """Extract the cache policy declared on a field.

        Args:
            field_def: A graphql-core field definition.

        Returns:
            The FieldCachePolicy, or None if the field is not cached.
        """
        directive = self._find_ast_directive(field_def, self._config.cache_directive)
        if directive is not None:
            return FieldCachePolicy.from_directive(**self._parse_cache_args(directive))

        extension = _extensions(field_def).get(self._config.cache_directive)
        if isinstance(extension, FieldCachePolicy):
            return extension
        if isinstance(extension, Mapping):
            return FieldCachePolicy.from_mapping(dict(extension))

        for strawberry_directive in self._strawberry_directives(field_def):
            to_policy = getattr(strawberry_directive, "to_policy", None)
            if callable(to_policy):
                return to_policy()

        return None

    def has_cache_key(self, field_def: GraphQLField) -> bool:
        """Check if a field is annotated as its type's identity field."""
        if self._find_ast_directive(field_def, self._config.cache_key_directive):
            return True

        if _extensions(field_def).get("cache_key"):
            return True

        return any(
            getattr(directive, "is_cache_key", False)
            for directive in self._strawberry_directives(field_def)
        )

    def _find_ast_directive(self, field_def: GraphQLField, name: str) -> Any | None:
        ast_node = getattr(field_def, "ast_node", None)
        if ast_node is None:
            return None

        for directive in getattr(ast_node, "directives", None) or ():
            if directive.name.value == name:
                return directive

        return None

    def _parse_cache_args(self, directive: Any) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for arg in directive.arguments or ():
            value = value_from_ast_untyped(arg.value)
            if arg.name.value == "maxAge":
                values["max_age"] = value
            elif arg.name.value == "private":
                values["private"] = value
        return values

    def _strawberry_directives(self, field_def: GraphQLField) -> tuple[Any, ...]:
        definition = _extensions(field_def).get(STRAWBERRY_DEFINITION)
        return tuple(getattr(definition, "directives", None) or ())


def get_cache_directives_sdl() -> str:
    """Get the SDL definitions for @cache and @cacheKey.

    Add this to your type definitions to enable field caching.

    Returns:
        The SDL string for the directive definitions.
    """
    return CACHE_DIRECTIVE_SDL


def _extensions(field_def: GraphQLField) -> dict[str, Any]:
    return field_def.extensions or {}
