"""Strawberry extension for field-level caching."""

from typing import Any

from strawberry.extensions import SchemaExtension

from fieldcache.core.entities.cache_policy import FieldCachePolicy
from fieldcache.core.services.field_cache_service import FieldCacheService


def FieldCacheExtension(service: FieldCacheService) -> type[SchemaExtension]:
    """Create a Strawberry extension caching fields marked with ``Cache``.

    Usage:
        from strawberry import Schema
        from fieldcache.adapters.strawberry import FieldCacheExtension

        schema = Schema(
            query=Query,
            extensions=[FieldCacheExtension(service)],
        )

    List it last among the extensions, so that a hit short-circuits the
    resolve hooks of the others.

    Args:
        service: The field cache service.

    Returns:
        A SchemaExtension subclass.
    """
    # (type name, field name) -> policy, None for uncached fields
    policies: dict[tuple[str, str], FieldCachePolicy | None] = {}

    def policy_for(info: Any) -> FieldCachePolicy | None:
        key = (info.parent_type.name, info.field_name)
        if key not in policies:
            field_def = info.parent_type.fields[info.field_name]
            policies[key] = service.parser.field_policy(field_def)
        return policies[key]

    class _FieldCacheExtension(SchemaExtension):
        def resolve(
            self,
            _next: Any,
            root: Any,
            info: Any,
            *args: Any,
            **kwargs: Any,
        ) -> Any:
            policy = policy_for(info)
            if policy is None:
                return _next(root, info, *args, **kwargs)

            def next_resolver(parent: Any, info: Any, **field_args: Any) -> Any:
                return _next(parent, info, *args, **field_args)

            return service.wrap(next_resolver, policy)(root, info, **kwargs)

    return _FieldCacheExtension
