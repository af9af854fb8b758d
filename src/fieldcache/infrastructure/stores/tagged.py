"""Tag-scoped store view."""

import hashlib
import uuid
from collections.abc import Sequence
from typing import Any

from fieldcache.core.interfaces.cache_store import ICacheStore


class TaggedCache:
    """A view of a cache store scoped to a set of tags.

    Uses namespace versioning instead of tag-to-key indexes: every tag
    owns a random version id kept in the underlying store, and entries
    written through the view live under a key prefixed with the hash of
    the current versions of all its tags. Flushing a tag rotates its
    version, so every entry written under it becomes unreachable at once
    and ages out of the store on its own.

    Works on top of any store providing get/put/forever.
    """

    def __init__(
        self,
        store: ICacheStore,
        names: Sequence[str],
        prefix: str = "tag",
    ) -> None:
        """Initialize the tagged view.

        Args:
            store: The underlying cache store.
            names: Tag names, in a deterministic order.
            prefix: Prefix of the keys holding tag versions.
        """
        self._store = store
        self._names = tuple(names)
        self._prefix = prefix

    @property
    def names(self) -> tuple[str, ...]:
        """Get the tag names of this view."""
        return self._names

    def get(self, key: str) -> Any | None:
        """Retrieve a value written through a view with the same tags."""
        return self._store.get(self.tagged_key(key))

    def put(self, key: str, value: Any, ttl: int) -> None:
        """Store a value that expires ``ttl`` seconds from now."""
        self._store.put(self.tagged_key(key), value, ttl)

    def forever(self, key: str, value: Any) -> None:
        """Store a value without expiry."""
        self._store.forever(self.tagged_key(key), value)

    def flush(self) -> None:
        """Invalidate every entry written under any of this view's tags."""
        for name in self._names:
            self._store.forever(self._version_key(name), uuid.uuid4().hex)

    def tagged_key(self, key: str) -> str:
        """Prefix a key with the namespace of the current tag versions."""
        return f"{self._namespace()}:{key}"

    def _namespace(self) -> str:
        versions = "|".join(self._version(name) for name in self._names)
        return hashlib.sha1(versions.encode()).hexdigest()

    def _version(self, name: str) -> str:
        version_key = self._version_key(name)
        version = self._store.get(version_key)
        if not version:
            version = uuid.uuid4().hex
            self._store.forever(version_key, version)
        return str(version)

    def _version_key(self, name: str) -> str:
        return f"{self._prefix}:{name}:key"
