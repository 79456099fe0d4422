"""DuckDB-backed key/value store (the persistent-store boundary)."""

import asyncio
import logging
from pathlib import Path

import duckdb

from effectivedex.errors import PersistenceFailure

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class KeyValueStore:
    """String keys to string values in a single DuckDB table.

    Each operation runs in a worker thread on its own cursor so the event
    loop only suspends at the I/O boundary. Storage errors are raised as
    ``PersistenceFailure``; callers decide whether they are fatal.
    """

    def __init__(self, database_path: str | Path = MEMORY_DATABASE):
        """Open (or create) the store.

        Args:
            database_path: Path to the .duckdb file, or ":memory:" for a
                          process-local store (tests, ephemeral runs)
        """
        self._db_path = str(database_path)
        if self._db_path != MEMORY_DATABASE:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self._conn = duckdb.connect(self._db_path)
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kv_store (key VARCHAR PRIMARY KEY, value VARCHAR NOT NULL)"
            )
        except duckdb.Error as e:
            raise PersistenceFailure(f"Cannot open key/value store at {self._db_path}: {e}") from e
        logger.info(f"KeyValueStore: Using {self._db_path}")

    @property
    def database_path(self) -> str:
        return self._db_path

    def close(self) -> None:
        self._conn.close()

    # Synchronous primitives, executed off the event loop

    def _get(self, key: str) -> str | None:
        with self._conn.cursor() as cur:
            row = cur.execute("SELECT value FROM kv_store WHERE key = ?", [key]).fetchone()
        return row[0] if row else None

    def _set(self, key: str, value: str) -> None:
        with self._conn.cursor() as cur:
            cur.execute("INSERT OR REPLACE INTO kv_store VALUES (?, ?)", [key, value])

    def _delete(self, keys: list[str]) -> None:
        with self._conn.cursor() as cur:
            for key in keys:
                cur.execute("DELETE FROM kv_store WHERE key = ?", [key])

    def _list_keys(self, prefix: str) -> list[str]:
        with self._conn.cursor() as cur:
            rows = cur.execute(
                "SELECT key FROM kv_store WHERE starts_with(key, ?) ORDER BY key", [prefix]
            ).fetchall()
        return [row[0] for row in rows]

    async def _run(self, operation: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except duckdb.Error as e:
            raise PersistenceFailure(f"Key/value {operation} failed: {e}") from e

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        return await self._run("get", self._get, key)

    async def set(self, key: str, value: str) -> None:
        await self._run("set", self._set, key, value)

    async def delete(self, *keys: str) -> None:
        if keys:
            await self._run("delete", self._delete, list(keys))

    async def list_keys(self, prefix: str = "") -> list[str]:
        return await self._run("list_keys", self._list_keys, prefix)
