"""Two-tier TTL cache in front of the remote source.

Resolution order is memory, then the persistent key/value store, then the
remote source. A remote hit is written to both tiers; a persistent-tier
failure never hides a value that was fetched successfully.
"""

import logging
import time
from typing import Callable, Optional

from pydantic import BaseModel, ValidationError

from effectivedex.errors import PersistenceFailure, RemoteSourceError, SourceUnavailable
from effectivedex.models.cache import CacheEntry
from effectivedex.repositories.kv_store import KeyValueStore
from effectivedex.services.remote_source import RemoteSource

logger = logging.getLogger(__name__)

CACHE_NAMESPACE = "api_cache_"
DEFAULT_TTL_SECONDS = 60 * 60 * 24


class TieredCache:
    """Memory + persistent cache with lazy TTL expiry.

    Concurrent resolutions of the same key are not deduplicated; each
    writes an equivalent entry and the last write wins.
    """

    def __init__(
        self,
        remote: RemoteSource,
        store: KeyValueStore,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the cache.

        Args:
            remote: Source consulted when both tiers miss
            store: Persistent tier
            ttl_seconds: Uniform time-to-live for every entry
            clock: Returns current epoch seconds (injectable for tests)
        """
        self.remote = remote
        self.store = store
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._memory: dict[str, CacheEntry] = {}

    @staticmethod
    def storage_key(key: str) -> str:
        return f"{CACHE_NAMESPACE}{key}"

    def _is_live(self, entry: CacheEntry) -> bool:
        return entry.is_live(self._clock(), self.ttl_seconds)

    async def _read_persistent(self, key: str) -> Optional[CacheEntry]:
        try:
            raw = await self.store.get(self.storage_key(key))
        except PersistenceFailure as e:
            logger.warning(f"Cache read error for {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable cache entry for {key}: {e}")
            return None

    async def _write(self, key: str, entry: CacheEntry) -> None:
        self._memory[key] = entry
        try:
            await self.store.set(self.storage_key(key), entry.model_dump_json(by_alias=True))
        except PersistenceFailure as e:
            logger.warning(f"Cache write error for {key} (kept in memory only): {e}")

    async def lookup(self, key: str) -> Optional[BaseModel]:
        """Return a live cached value from either tier without going remote."""
        entry = self._memory.get(key)
        if entry is not None and self._is_live(entry):
            logger.debug(f"Memory hit: {key}")
            return entry.value

        entry = await self._read_persistent(key)
        if entry is not None and self._is_live(entry):
            logger.debug(f"Persistent hit: {key}")
            self._memory[key] = entry
            return entry.value

        return None

    async def store_value(self, key: str, value: BaseModel) -> None:
        """Write a value to both tiers, stamped with the current time."""
        await self._write(key, CacheEntry(value=value, fetched_at=self._clock()))

    async def resolve(self, key: str) -> BaseModel:
        """Resolve a key through memory, persistent storage, then remote.

        Raises:
            SourceUnavailable: Both tiers missed and the remote fetch failed
        """
        cached = await self.lookup(key)
        if cached is not None:
            return cached

        logger.debug(f"Cache miss: {key}")
        try:
            value = await self.remote.fetch(key)
        except RemoteSourceError as e:
            raise SourceUnavailable(key, str(e)) from e

        await self.store_value(key, value)
        return value

    async def clear(self) -> None:
        """Drop every memory entry, then every namespaced persistent entry.

        Memory is cleared unconditionally before touching storage.

        Raises:
            PersistenceFailure: Persistent entries could not be listed or deleted
        """
        self._memory.clear()
        keys = await self.store.list_keys(CACHE_NAMESPACE)
        await self.store.delete(*keys)
        logger.info(f"Cache cleared ({len(keys)} persistent entries removed)")

    def memory_size(self) -> int:
        return len(self._memory)
