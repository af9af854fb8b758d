"""Tests for CachingResolver and the write-through continuation."""

import asyncio
import threading
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from graphql import build_schema

from fieldcache.core.errors import ConfigurationError
from fieldcache.core.services.caching_resolver import CacheStats, CachingResolver, then
from fieldcache.core.services.directive_parser import CACHE_DIRECTIVE_SDL
from fieldcache.core.services.field_cache_service import FieldCacheService
from fieldcache.infrastructure.key_builders.default import DefaultKeyBuilder
from fieldcache.infrastructure.stores.memory import InMemoryCacheStore

SCHEMA = build_schema(
    CACHE_DIRECTIVE_SDL
    + """
    type Query {
        posts: [Post!]!
    }

    type Post {
        uuid: String! @cacheKey
        title: String
        draft: String
    }

    type Comment {
        body: String
    }
    """
)

TITLE_KEY = "fieldcache:field:t:Post:p1:f:title"


def _info(type_name: str, field_name: str, context: Any = None) -> SimpleNamespace:
    """Create the parts of GraphQLResolveInfo the caching resolver reads."""
    return SimpleNamespace(
        parent_type=SCHEMA.get_type(type_name),
        schema=SCHEMA,
        field_name=field_name,
        context=context,
    )


def _missing_store() -> MagicMock:
    store = MagicMock()
    store.get.return_value = None
    return store


@pytest.fixture
def store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def service(store: InMemoryCacheStore) -> FieldCacheService:
    return FieldCacheService(store=store, key_builder=DefaultKeyBuilder())


class TestReadThrough:
    """Tests for the hit and miss paths."""

    def test_miss_calls_resolver_and_writes(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        """Test that a miss resolves and stores the value."""
        resolver = MagicMock(return_value="Hello")
        cached = service.wrap_resolver(resolver, max_age=30)

        result = cached({"uuid": "p1"}, _info("Post", "title"))

        assert result == "Hello"
        resolver.assert_called_once()
        assert store.get(TITLE_KEY) == "Hello"

    def test_hit_short_circuits(self, service: FieldCacheService) -> None:
        """Test that a hit never calls the wrapped resolver."""
        resolver = MagicMock(return_value="Hello")
        cached = service.wrap_resolver(resolver, max_age=30)

        cached({"uuid": "p1"}, _info("Post", "title"))
        result = cached({"uuid": "p1"}, _info("Post", "title"))

        assert result == "Hello"
        assert resolver.call_count == 1

    def test_prefilled_entry_served(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        store.forever(TITLE_KEY, "Cached")
        resolver = MagicMock(return_value="Fresh")

        result = service.wrap_resolver(resolver)({"uuid": "p1"}, _info("Post", "title"))

        assert result == "Cached"
        resolver.assert_not_called()

    def test_resolver_receives_arguments(self, service: FieldCacheService) -> None:
        resolver = MagicMock(return_value="Hello")
        parent = {"uuid": "p1"}
        info = _info("Post", "title")

        service.wrap_resolver(resolver)(parent, info, lang="en")

        resolver.assert_called_once_with(parent, info, lang="en")

    def test_arguments_scope_entries(self, service: FieldCacheService) -> None:
        """Test that different arguments do not share an entry."""
        resolver = MagicMock(side_effect=lambda parent, info, lang: lang)
        cached = service.wrap_resolver(resolver)

        assert cached({"uuid": "p1"}, _info("Post", "title"), lang="en") == "en"
        assert cached({"uuid": "p1"}, _info("Post", "title"), lang="fr") == "fr"
        assert resolver.call_count == 2

    def test_instances_scope_entries(self, service: FieldCacheService) -> None:
        resolver = MagicMock(side_effect=lambda parent, info: parent["uuid"])
        cached = service.wrap_resolver(resolver)

        assert cached({"uuid": "p1"}, _info("Post", "title")) == "p1"
        assert cached({"uuid": "p2"}, _info("Post", "title")) == "p2"

    def test_root_field(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        """Test that query root fields are cached without an identity."""
        resolver = MagicMock(return_value=[{"uuid": "p1"}])

        service.wrap_resolver(resolver, max_age=60)(None, _info("Query", "posts"))

        assert store.get("fieldcache:field:f:posts") == [{"uuid": "p1"}]

    def test_falsy_cached_value_reads_as_miss(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        """Test that falsy values are written but never served."""
        resolver = MagicMock(return_value=0)
        cached = service.wrap_resolver(resolver)

        assert cached({"uuid": "p1"}, _info("Post", "title")) == 0
        assert cached({"uuid": "p1"}, _info("Post", "title")) == 0

        assert resolver.call_count == 2
        assert store.get(TITLE_KEY) == 0


class TestWriteThrough:
    """Tests for how values reach the store."""

    def test_max_age_uses_put(self) -> None:
        store = _missing_store()
        service = FieldCacheService(store=store, key_builder=DefaultKeyBuilder())

        service.wrap_resolver(MagicMock(return_value="Hello"), max_age=60)(
            {"uuid": "p1"}, _info("Post", "title")
        )

        store.put.assert_called_once_with(TITLE_KEY, "Hello", 60)
        store.forever.assert_not_called()

    def test_no_max_age_uses_forever(self) -> None:
        store = _missing_store()
        service = FieldCacheService(store=store, key_builder=DefaultKeyBuilder())

        service.wrap_resolver(MagicMock(return_value="Hello"))(
            {"uuid": "p1"}, _info("Post", "title")
        )

        store.forever.assert_called_once_with(TITLE_KEY, "Hello")
        store.put.assert_not_called()

    def test_post_title_scenario(self) -> None:
        """Test a 30 second write for Post p1 served back without resolving."""
        store = MagicMock(wraps=InMemoryCacheStore())
        service = FieldCacheService(store=store, key_builder=DefaultKeyBuilder())
        resolver = MagicMock(return_value="Hello")
        cached = service.wrap_resolver(resolver, max_age=30)

        cached({"uuid": "p1"}, _info("Post", "title"))
        store.put.assert_called_once_with(TITLE_KEY, "Hello", 30)
        resolver.reset_mock()

        assert cached({"uuid": "p1"}, _info("Post", "title")) == "Hello"
        assert resolver.call_count == 0

    def test_store_errors_propagate(self) -> None:
        """Test that store failures surface instead of degrading to a miss."""
        store = MagicMock()
        store.get.side_effect = ConnectionError("store down")
        service = FieldCacheService(store=store, key_builder=DefaultKeyBuilder())
        resolver = MagicMock(return_value="Hello")

        with pytest.raises(ConnectionError):
            service.wrap_resolver(resolver)({"uuid": "p1"}, _info("Post", "title"))

        resolver.assert_not_called()

    def test_resolver_errors_propagate(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        resolver = MagicMock(side_effect=ValueError("boom"))

        with pytest.raises(ValueError):
            service.wrap_resolver(resolver)({"uuid": "p1"}, _info("Post", "title"))

        assert store.get(TITLE_KEY) is None


class TestIdentity:
    """Tests for parent scoping failures."""

    def test_type_without_identity_field(self, service: FieldCacheService) -> None:
        resolver = MagicMock(return_value="text")

        with pytest.raises(ConfigurationError) as exc_info:
            service.wrap_resolver(resolver)({"body": "text"}, _info("Comment", "body"))

        assert "No @cacheKey or ID! field defined on Comment" in str(exc_info.value)
        resolver.assert_not_called()

    def test_parent_without_identity_value(self, service: FieldCacheService) -> None:
        resolver = MagicMock(return_value="Hello")

        with pytest.raises(ConfigurationError):
            service.wrap_resolver(resolver)({"title": "Hello"}, _info("Post", "title"))

        resolver.assert_not_called()

    def test_identity_field_memoized(self, service: FieldCacheService) -> None:
        cached = service.wrap_resolver(MagicMock(return_value="Hello"))

        cached({"uuid": "p1"}, _info("Post", "title"))

        assert service.identity_resolver.is_resolved("Post")


class TestPrivateFields:
    """Tests for viewer-scoped entries."""

    def test_private_entry_scoped_to_viewer(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        resolver = MagicMock(side_effect=["draft of u1", "draft of u2"])
        cached = service.wrap_resolver(resolver, private=True)

        first = cached({"uuid": "p1"}, _info("Post", "draft", {"user": {"id": "u1"}}))
        second = cached({"uuid": "p1"}, _info("Post", "draft", {"user": {"id": "u2"}}))

        assert (first, second) == ("draft of u1", "draft of u2")
        assert store.get("fieldcache:field:u:u1:t:Post:p1:f:draft") == "draft of u1"

    def test_anonymous_viewer_shares_public_entry(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        cached = service.wrap_resolver(MagicMock(return_value="public"), private=True)

        cached({"uuid": "p1"}, _info("Post", "draft", {}))

        assert store.get("fieldcache:field:t:Post:p1:f:draft") == "public"

    def test_viewer_only_read_for_private_fields(
        self, store: InMemoryCacheStore
    ) -> None:
        viewer = MagicMock(return_value="u1")
        service = FieldCacheService(
            store=store, key_builder=DefaultKeyBuilder(), viewer=viewer
        )

        service.wrap_resolver(MagicMock(return_value="Hello"))(
            {"uuid": "p1"}, _info("Post", "title", {"token": "t"})
        )
        viewer.assert_not_called()

        service.wrap_resolver(MagicMock(return_value="Hello"), private=True)(
            {"uuid": "p1"}, _info("Post", "draft", {"token": "t"})
        )
        viewer.assert_called_once_with({"token": "t"})


class TestDeferredValues:
    """Tests for futures and coroutines returned by resolvers."""

    async def test_future_returned_unchanged(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        """Test that a pending future is handed back as-is and written once set."""
        future = asyncio.get_running_loop().create_future()
        cached = service.wrap_resolver(MagicMock(return_value=future), max_age=30)

        result = cached({"uuid": "p1"}, _info("Post", "title"))

        assert result is future
        assert store.get(TITLE_KEY) is None

        future.set_result("Hello")
        await asyncio.sleep(0)

        assert store.get(TITLE_KEY) == "Hello"
        assert await result == "Hello"

    async def test_failed_future_not_written(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        future = asyncio.get_running_loop().create_future()
        result = service.wrap_resolver(MagicMock(return_value=future))(
            {"uuid": "p1"}, _info("Post", "title")
        )

        future.set_exception(ValueError("batch failed"))
        await asyncio.sleep(0)

        assert store.get(TITLE_KEY) is None
        with pytest.raises(ValueError):
            await result

    async def test_cancelled_future_not_written(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        future = asyncio.get_running_loop().create_future()
        service.wrap_resolver(MagicMock(return_value=future))(
            {"uuid": "p1"}, _info("Post", "title")
        )

        future.cancel()
        await asyncio.sleep(0)

        assert store.get(TITLE_KEY) is None

    async def test_coroutine_written_after_await(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        async def resolve_title(parent: Any, info: Any) -> str:
            return "Hello"

        result = service.wrap_resolver(resolve_title)(
            {"uuid": "p1"}, _info("Post", "title")
        )

        assert store.get(TITLE_KEY) is None
        assert await result == "Hello"
        assert store.get(TITLE_KEY) == "Hello"

    async def test_hit_skips_async_resolver(
        self, service: FieldCacheService, store: InMemoryCacheStore
    ) -> None:
        calls = []

        async def resolve_title(parent: Any, info: Any) -> str:
            calls.append(parent)
            return "Hello"

        cached = service.wrap_resolver(resolve_title)
        await cached({"uuid": "p1"}, _info("Post", "title"))

        assert cached({"uuid": "p1"}, _info("Post", "title")) == "Hello"
        assert len(calls) == 1


class TestThen:
    """Tests for the settle continuation helper."""

    def test_plain_value(self) -> None:
        settled = []

        assert then("Hello", settled.append) == "Hello"
        assert settled == ["Hello"]

    async def test_future_callback_runs_after_result(self) -> None:
        settled: list = []
        future = asyncio.get_running_loop().create_future()

        assert then(future, settled.append) is future
        assert settled == []

        future.set_result(42)
        await asyncio.sleep(0)

        assert settled == [42]


class TestStats:
    def test_counters(self, service: FieldCacheService) -> None:
        cached = service.wrap_resolver(MagicMock(return_value="Hello"))

        cached({"uuid": "p1"}, _info("Post", "title"))
        cached({"uuid": "p1"}, _info("Post", "title"))

        assert service.stats == {"hits": 1, "misses": 1, "writes": 1, "total": 2}

        service.reset_stats()
        assert service.stats["total"] == 0

    def test_standalone_stats(self) -> None:
        stats = CacheStats(hits=2, misses=3)

        assert stats.as_dict()["total"] == 5

    def test_counters_from_many_threads(self) -> None:
        """Test that no increment is lost when threads record concurrently."""
        stats = CacheStats()

        def record() -> None:
            for _ in range(1000):
                stats.record_hit()
                stats.record_write()

        threads = [threading.Thread(target=record) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert stats.as_dict() == {
            "hits": 8000,
            "misses": 0,
            "writes": 8000,
            "total": 8000,
        }


def test_caching_resolver_exposes_chain(service: FieldCacheService) -> None:
    """Test that the caching resolver keeps the next resolver of the chain."""
    resolver = MagicMock()

    cached = service.wrap_resolver(resolver, max_age=10, private=True)

    assert isinstance(cached, CachingResolver)
    assert cached.next_resolver is resolver
    assert cached.policy.max_age == 10
    assert cached.policy.private is True
