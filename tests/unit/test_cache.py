"""Tests for cache keys, the memory cache, and the cache-aside wrapper."""

from unittest.mock import AsyncMock

import pytest

from portfolio.application.dtos.access import Principal
from portfolio.application.dtos.query import FilterClause, QuerySpec
from portfolio.application.services import envelope as envelopes
from portfolio.infrastructure.cache.cache_aside import CacheAside
from portfolio.infrastructure.cache.keys import list_key, resource_prefix, signature_digest
from portfolio.infrastructure.cache.memory_cache import MemoryCache

ALICE = Principal(id="alice", email="alice@example.com")
BOB = Principal(id="bob", email="bob@example.com")


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_list_key_layout() -> None:
    signature = '{"page":1}'
    key = list_key("loans", "alice", signature)
    assert key == "api:loans:user:alice:" + signature_digest(signature)
    assert key.startswith(resource_prefix("loans", "alice"))
    assert key.startswith(resource_prefix("loans"))


def test_anonymous_bucket() -> None:
    assert list_key("loans", None, "sig").startswith("api:loans:user:anonymous:")


@pytest.mark.parametrize("bad", ["", "a:b", "x*"])
def test_key_components_are_validated(bad: str) -> None:
    with pytest.raises(ValueError):
        resource_prefix("loans", bad)


def test_signature_ignores_filter_order() -> None:
    a = QuerySpec(filters=(FilterClause("loan_type", "eq", "mortgage"), FilterClause("owner_id", "eq", "o1")))
    b = QuerySpec(filters=(FilterClause("owner_id", "eq", "o1"), FilterClause("loan_type", "eq", "mortgage")))
    assert a.signature() == b.signature()
    assert a.signature() != QuerySpec(page=2).signature()


async def test_memory_cache_expires_entries() -> None:
    clock = FakeClock()
    cache = MemoryCache(default_ttl=10, clock=clock)
    await cache.set("k", {"v": 1})
    assert await cache.get("k") == {"v": 1}
    clock.now = 10.0
    assert await cache.get("k") is None


async def test_memory_cache_delete_prefix() -> None:
    cache = MemoryCache()
    await cache.set("api:loans:user:alice:1", 1)
    await cache.set("api:loans:user:alice:2", 2)
    await cache.set("api:loans:user:bob:1", 3)
    assert await cache.delete_prefix("api:loans:user:alice:") == 2
    assert await cache.get("api:loans:user:bob:1") == 3


async def test_cache_aside_serves_second_call_from_cache() -> None:
    handler = AsyncMock(return_value=envelopes.paginated([{"id": "l1"}], 1, 20, 1))
    cached = CacheAside(MemoryCache()).wrap(handler, resource_name="loans", ttl_seconds=60)
    first = await cached(ALICE, QuerySpec())
    second = await cached(ALICE, QuerySpec())
    assert first == second
    handler.assert_awaited_once()


async def test_cache_aside_partitions_by_principal() -> None:
    handler = AsyncMock(return_value=envelopes.paginated([], 1, 20, 0))
    cached = CacheAside(MemoryCache()).wrap(handler, resource_name="loans", ttl_seconds=60)
    await cached(ALICE, QuerySpec())
    await cached(BOB, QuerySpec())
    assert handler.await_count == 2


async def test_cache_aside_does_not_store_failures() -> None:
    handler = AsyncMock(return_value=envelopes.unauthorized())
    cached = CacheAside(MemoryCache()).wrap(handler, resource_name="loans", ttl_seconds=60)
    await cached(ALICE, QuerySpec())
    await cached(ALICE, QuerySpec())
    assert handler.await_count == 2


async def test_cache_aside_without_backend_calls_through() -> None:
    handler = AsyncMock(return_value=envelopes.paginated([], 1, 20, 0))
    cached = CacheAside(None).wrap(handler, resource_name="loans", ttl_seconds=60)
    await cached(ALICE, QuerySpec())
    await cached(ALICE, QuerySpec())
    assert handler.await_count == 2
    assert await CacheAside(None).invalidate_resource("loans", "alice") == 0


async def test_cache_errors_degrade_to_miss_and_noop() -> None:
    backend = AsyncMock()
    backend.get.side_effect = ConnectionError("down")
    backend.set.side_effect = ConnectionError("down")
    backend.delete_prefix.side_effect = ConnectionError("down")
    handler = AsyncMock(return_value=envelopes.paginated([], 1, 20, 0))
    aside = CacheAside(backend)
    cached = aside.wrap(handler, resource_name="loans", ttl_seconds=60)

    envelope = await cached(ALICE, QuerySpec())

    assert envelope.success is True
    handler.assert_awaited_once()
    assert await aside.invalidate_resource("loans", "alice") == 0


async def test_invalidation_is_scoped_to_principal() -> None:
    cache = MemoryCache()
    handler = AsyncMock(return_value=envelopes.paginated([], 1, 20, 0))
    aside = CacheAside(cache)
    cached = aside.wrap(handler, resource_name="loans", ttl_seconds=60)
    await cached(ALICE, QuerySpec())
    await cached(BOB, QuerySpec())

    assert await aside.invalidate_resource("loans", "alice") == 1
    await cached(BOB, QuerySpec())
    assert handler.await_count == 2
    await cached(ALICE, QuerySpec())
    assert handler.await_count == 3
