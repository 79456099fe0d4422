#!/usr/bin/env python3
"""Warm (or clear) the persistent PokeAPI cache from the command line.

Assembles the entity catalog so the API starts with a populated cache.

Usage:
    uv run python scripts/warm_cache.py [--clear] [--catalog-size N] [--database PATH]
"""
import argparse
import asyncio
import logging
from pathlib import Path

from effectivedex.config import settings
from effectivedex.repositories.kv_store import KeyValueStore
from effectivedex.services.bulk_loader import BulkLoader
from effectivedex.services.effectiveness_engine import EffectivenessEngine
from effectivedex.services.remote_source import PokeApiClient
from effectivedex.services.tiered_cache import TieredCache
from effectivedex.utils.type_tags import TYPE_ORDER


async def run(database: Path, catalog_size: int, clear: bool) -> None:
    client = PokeApiClient(settings.api_base_url, timeout=settings.http_timeout)
    store = KeyValueStore(database)
    cache = TieredCache(client, store, ttl_seconds=settings.cache_ttl_seconds)
    try:
        if clear:
            await cache.clear()
            print(f"Cleared cache in {database}")
            return

        loader = BulkLoader(
            cache,
            language=settings.localized_language,
            catalog_size=catalog_size,
            concurrency=settings.fetch_concurrency,
        )
        await loader.warm_cache()

        # Type relations are small and used by every effectiveness lookup
        engine = EffectivenessEngine(cache)
        relations = await engine.resolve_all(TYPE_ORDER)
        print(f"Warmed {database}: {cache.memory_size()} entries, {len(relations)}/{len(TYPE_ORDER)} types")
    finally:
        await client.close()
        store.close()


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--clear", action="store_true", help="Clear the cache instead of warming it")
    parser.add_argument("--catalog-size", type=int, default=settings.catalog_size)
    parser.add_argument("--database", type=Path, default=Path(settings.database_path))
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    asyncio.run(run(args.database, args.catalog_size, args.clear))


if __name__ == "__main__":
    main()
