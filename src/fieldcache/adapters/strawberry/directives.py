"""Strawberry schema directives for field caching.

Usage:
    from fieldcache.adapters.strawberry import Cache, CacheIdentity

    @strawberry.type
    class Post:
        uuid: str = strawberry.field(directives=[CacheIdentity()])
        title: str = strawberry.field(directives=[Cache(max_age=30)])
"""

from typing import ClassVar, Optional

import strawberry
from strawberry.schema_directive import Location

from fieldcache.core.entities.cache_policy import FieldCachePolicy


@strawberry.schema_directive(
    locations=[Location.FIELD_DEFINITION],
    name="cache",
    description="Cache the result of a resolver.",
)
class Cache:
    max_age: Optional[int] = None
    private: bool = False

    def to_policy(self) -> FieldCachePolicy:
        return FieldCachePolicy.from_directive(
            max_age=self.max_age,
            private=self.private,
        )


@strawberry.schema_directive(
    locations=[Location.FIELD_DEFINITION],
    name="cacheKey",
    description="Use this field's value as the identity of its type in cache keys.",
)
class CacheIdentity:
    is_cache_key: ClassVar[bool] = True
