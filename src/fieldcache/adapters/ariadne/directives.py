"""Ariadne schema directive for field caching."""

from typing import Any

from ariadne import SchemaDirectiveVisitor
from graphql import GraphQLField, default_field_resolver, is_object_type

from fieldcache.core.entities.cache_policy import FieldCachePolicy
from fieldcache.core.services.field_cache_service import FieldCacheService


def make_cache_directive(service: FieldCacheService) -> type[SchemaDirectiveVisitor]:
    """Create the ``@cache`` directive visitor bound to a cache service.

    Ariadne visits schema directives after binding resolvers, so the
    caching resolver wraps the bound resolver from the outside.

    Usage:
        from fieldcache import CACHE_DIRECTIVE_SDL
        from fieldcache.adapters.ariadne import make_cache_directive

        type_defs = CACHE_DIRECTIVE_SDL + '''
            type Query {
                posts: [Post!]! @cache(maxAge: 60)
            }

            type Post {
                uuid: String! @cacheKey
                title: String! @cache(maxAge: 30)
                draft: String @cache(private: true)
            }
        '''

        schema = make_executable_schema(
            type_defs,
            query,
            directives={"cache": make_cache_directive(service)},
        )

    Args:
        service: The field cache service.

    Returns:
        A SchemaDirectiveVisitor subclass for the ``directives`` mapping.

    Raises:
        ConfigurationError: From ``make_executable_schema``, when a type
            owning a ``@cache`` field has no usable identity field.
    """

    class CacheDirective(SchemaDirectiveVisitor):
        def visit_field_definition(
            self,
            field: GraphQLField,
            object_type: Any,
        ) -> GraphQLField:
            policy = FieldCachePolicy.from_directive(
                max_age=self.args.get("maxAge"),
                private=self.args.get("private"),
            )
            if is_object_type(object_type):
                # Fail the schema build for a parent type without identity
                service.identity_resolver.identity_descriptor(
                    object_type.name,
                    lambda: service.parser.describe_type(object_type, self.schema),
                )
            field.resolve = service.wrap(field.resolve or default_field_resolver, policy)
            return field

    return CacheDirective
