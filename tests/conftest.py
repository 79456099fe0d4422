"""Shared fixtures: fresh core instances per test."""

import pytest

from effectivedex.repositories.kv_store import KeyValueStore
from effectivedex.services.remote_source import StaticRemoteSource
from effectivedex.services.tiered_cache import TieredCache
from tests.factories import type_documents


class FakeClock:
    """Manually advanced epoch clock."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv_store():
    store = KeyValueStore()
    yield store
    store.close()


@pytest.fixture
def remote():
    return StaticRemoteSource(type_documents())


@pytest.fixture
def cache(remote, kv_store, clock):
    return TieredCache(remote, kv_store, ttl_seconds=60 * 60 * 24, clock=clock)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"
