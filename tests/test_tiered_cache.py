"""Tests for the two-tier TTL cache."""

import pytest

from effectivedex.errors import PersistenceFailure, RemoteUnreachable, SourceUnavailable
from effectivedex.models.payloads import TypePayload
from effectivedex.repositories.kv_store import KeyValueStore
from effectivedex.services.remote_source import StaticRemoteSource
from effectivedex.services.tiered_cache import CACHE_NAMESPACE, TieredCache

pytestmark = pytest.mark.anyio

TTL = 60 * 60 * 24


class FailingWriteStore(KeyValueStore):
    """Store whose writes and deletes always fail."""

    async def set(self, key, value):
        raise PersistenceFailure("disk full")

    async def delete(self, *keys):
        raise PersistenceFailure("disk full")


async def test_resolve_fetches_once_then_serves_memory(cache, remote):
    first = await cache.resolve("/type/fire")
    second = await cache.resolve("/type/fire")

    assert isinstance(first, TypePayload)
    assert first == second
    assert remote.call_count("/type/fire") == 1


async def test_ttl_boundary(cache, remote, clock):
    """Live just before TTL, refetched just after."""
    await cache.resolve("/type/water")

    clock.advance(TTL - 0.001)
    await cache.resolve("/type/water")
    assert remote.call_count("/type/water") == 1

    clock.advance(0.002)
    await cache.resolve("/type/water")
    assert remote.call_count("/type/water") == 2


async def test_persistent_hit_is_promoted(cache, kv_store, clock):
    await cache.resolve("/type/grass")

    offline = StaticRemoteSource()
    fresh = TieredCache(offline, kv_store, ttl_seconds=TTL, clock=clock)
    value = await fresh.resolve("/type/grass")

    assert value.name == "grass"
    assert offline.calls == []
    assert fresh.memory_size() == 1


async def test_expired_persistent_entry_is_not_served(cache, kv_store, clock):
    await cache.resolve("/type/ice")
    clock.advance(TTL + 1)

    offline = StaticRemoteSource({"/type/ice": RemoteUnreachable("/type/ice", "offline")})
    fresh = TieredCache(offline, kv_store, ttl_seconds=TTL, clock=clock)
    with pytest.raises(SourceUnavailable):
        await fresh.resolve("/type/ice")


async def test_remote_failure_caches_nothing(kv_store, clock):
    remote = StaticRemoteSource({"/type/fire": RemoteUnreachable("/type/fire", "timeout")})
    cache = TieredCache(remote, kv_store, ttl_seconds=TTL, clock=clock)

    with pytest.raises(SourceUnavailable) as exc_info:
        await cache.resolve("/type/fire")

    assert isinstance(exc_info.value.__cause__, RemoteUnreachable)
    assert cache.memory_size() == 0
    assert await kv_store.list_keys(CACHE_NAMESPACE) == []


async def test_persistent_write_failure_keeps_memory_entry(remote, clock):
    store = FailingWriteStore()
    cache = TieredCache(remote, store, ttl_seconds=TTL, clock=clock)

    value = await cache.resolve("/type/normal")
    again = await cache.resolve("/type/normal")

    assert value.name == "normal"
    assert again == value
    assert remote.call_count("/type/normal") == 1
    store.close()


async def test_lookup_does_not_go_remote(cache, remote):
    assert await cache.lookup("/type/fire") is None
    assert remote.calls == []


async def test_clear_drops_both_tiers_but_keeps_other_keys(cache, kv_store, remote):
    await kv_store.set("effectivedex_teams", "[]")
    await cache.resolve("/type/fire")
    await cache.resolve("/type/water")

    await cache.clear()

    assert cache.memory_size() == 0
    assert await kv_store.list_keys(CACHE_NAMESPACE) == []
    assert await kv_store.get("effectivedex_teams") == "[]"

    await cache.resolve("/type/fire")
    assert remote.call_count("/type/fire") == 2


async def test_clear_empties_memory_even_when_storage_fails(remote, clock):
    store = FailingWriteStore()
    cache = TieredCache(remote, store, ttl_seconds=TTL, clock=clock)
    await cache.resolve("/type/fire")

    with pytest.raises(PersistenceFailure):
        await cache.clear()

    assert cache.memory_size() == 0
    store.close()


async def test_unreadable_persistent_entry_is_a_miss(kv_store, remote, clock):
    await kv_store.set(f"{CACHE_NAMESPACE}/type/fire", "{not json")
    cache = TieredCache(remote, kv_store, ttl_seconds=TTL, clock=clock)

    value = await cache.resolve("/type/fire")

    assert value.name == "fire"
    assert remote.call_count("/type/fire") == 1
