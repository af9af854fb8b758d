"""Install field caching directly on a graphql-core schema."""

from typing import Any

from graphql import GraphQLSchema, default_field_resolver

from fieldcache.core.services.caching_resolver import CachingResolver
from fieldcache.core.services.directive_parser import SchemaDirectives
from fieldcache.core.services.field_cache_service import FieldCacheService


def apply_field_cache(
    schema: GraphQLSchema,
    service: FieldCacheService,
    validate: bool = True,
) -> SchemaDirectives:
    """Wrap the resolver of every ``@cache`` field of a schema.

    Call it after every resolver is bound, so the caching resolver ends
    up outermost. Fields without a resolver get graphql-core's default
    resolver wrapped. Applying twice leaves already cached fields alone.

    Example:
        schema = build_schema(CACHE_DIRECTIVE_SDL + type_defs)
        schema.query_type.fields["posts"].resolve = resolve_posts
        apply_field_cache(schema, service)

    Args:
        schema: The graphql-core schema.
        service: The field cache service.
        validate: Resolve identity fields now, so that a type without
            one fails at build time rather than on its first request.

    Returns:
        The parsed field cache directives.

    Raises:
        ConfigurationError: If validate is set and a type has no
            usable identity field.
    """
    if validate:
        directives = service.validate_schema(schema)
    else:
        directives = service.parser.parse_schema(schema)

    for key, policy in directives.field_policies.items():
        type_name, field_name = key.split(".", 1)
        object_type: Any = schema.get_type(type_name)
        field = object_type.fields[field_name]

        if isinstance(field.resolve, CachingResolver):
            continue

        field.resolve = service.wrap(field.resolve or default_field_resolver, policy)

    return directives
