"""graphql-core middleware applying field caching."""

from typing import Any

from fieldcache.core.services.directive_parser import SchemaDirectives
from fieldcache.core.services.field_cache_service import FieldCacheService


class FieldCacheMiddleware:
    """graphql-core middleware caching ``@cache`` fields.

    graphql-core chains middleware so that the last one in the list is
    the outermost. Put this middleware last, so that a hit short-circuits
    every other middleware:

        graphql(
            schema,
            query,
            middleware=[AuthMiddleware(), FieldCacheMiddleware(service)],
        )

    One instance may serve several schemas: directives are parsed once
    per executed schema object.

    Do not combine it with apply_field_cache on the same schema, or
    fields get cached twice.
    """

    def __init__(
        self,
        service: FieldCacheService,
        directives: SchemaDirectives | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            service: The field cache service.
            directives: Pre-parsed directives, used for every schema. Each
                executed schema is parsed on first use if not provided.
        """
        self._service = service
        self._directives = directives
        self._parsed: dict[Any, SchemaDirectives] = {}

    def directives_for(self, schema: Any) -> SchemaDirectives:
        """Get the cache directives of a schema, parsing it on first use."""
        if self._directives is not None:
            return self._directives
        if schema not in self._parsed:
            self._parsed[schema] = self._service.parser.parse_schema(schema)
        return self._parsed[schema]

    def resolve(self, next_: Any, root: Any, info: Any, **args: Any) -> Any:
        directives = self.directives_for(info.schema)
        policy = directives.get_policy(info.parent_type.name, info.field_name)
        if policy is None:
            return next_(root, info, **args)

        resolver = self._service.wrap(next_, policy)
        return resolver(root, info, **args)
