"""Concurrent entity loading and in-memory catalog search."""

import asyncio
import logging
from datetime import datetime
from typing import Optional, Sequence

from effectivedex.errors import SourceUnavailable
from effectivedex.models.payloads import (
    EntityCatalogPayload,
    NamedRef,
    PokemonPayload,
    ResourceListPayload,
    SpeciesPayload,
)
from effectivedex.models.pokemon import EntityPage, EntitySummary, SearchQuery
from effectivedex.models.team import RosterMember
from effectivedex.services.remote_source import list_path, pokemon_path, species_path
from effectivedex.services.tiered_cache import TieredCache

logger = logging.getLogger(__name__)

ALL_ENTITIES_KEY = "all-entities"


def normalize_entity(
    pokemon: PokemonPayload,
    species: SpeciesPayload,
    language: str = "fr",
) -> EntitySummary:
    """Merge the base entity and its species metadata into one summary."""
    return EntitySummary(
        id=pokemon.id,
        canonical_name=pokemon.name,
        localized_name=species.localized_name(language) or pokemon.name,
        type_tags=pokemon.type_tags(),
        sprite_ref=pokemon.best_sprite(),
        generation=species.generation_number(),
    )


class BulkLoader:
    """Resolves many entities through the cache, tolerating partial failure."""

    def __init__(
        self,
        cache: TieredCache,
        language: str = "fr",
        catalog_size: int = 500,
        concurrency: int = 20,
    ):
        """Initialize the loader.

        Args:
            cache: Cache used for every sub-resource lookup
            language: Language code for localized names
            catalog_size: Number of entities assembled into the search catalog
            concurrency: Maximum entities loading at once

        Raises:
            ValueError: If concurrency is less than 1
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.cache = cache
        self.language = language
        self.catalog_size = catalog_size
        self._semaphore = asyncio.Semaphore(concurrency)

    async def resolve_entity_summary(self, id_or_name: int | str) -> EntitySummary:
        """Load one entity (base + species, concurrently).

        Raises:
            SourceUnavailable: Either sub-resource could not be resolved
        """
        pokemon, species = await asyncio.gather(
            self.cache.resolve(pokemon_path(id_or_name)),
            self.cache.resolve(species_path(id_or_name)),
        )
        return normalize_entity(pokemon, species, self.language)

    async def _load_item(self, ref: NamedRef) -> Optional[EntitySummary]:
        key = ref.resource_id or ref.name
        async with self._semaphore:
            try:
                return await self.resolve_entity_summary(key)
            except SourceUnavailable as e:
                logger.warning(f"Failed to load entity {ref.name}: {e}")
                return None

    async def load_roster(self, source_list: Sequence[NamedRef]) -> list[EntitySummary]:
        """Load every listed entity concurrently.

        Failed items are dropped; the rest keep their position order from
        ``source_list`` regardless of completion order.
        """
        if not source_list:
            return []
        results = await asyncio.gather(*(self._load_item(ref) for ref in source_list))
        loaded = [summary for summary in results if summary is not None]
        if len(loaded) < len(source_list):
            logger.warning(f"Loaded {len(loaded)}/{len(source_list)} entities")
        return loaded

    async def _resolve_listing(self, limit: int, offset: int) -> ResourceListPayload:
        key = list_path(limit, offset)
        listing = await self.cache.resolve(key)
        if not isinstance(listing, ResourceListPayload):
            raise SourceUnavailable(key, f"unexpected payload kind {getattr(listing, 'kind', None)}")
        return listing

    async def load_all(self) -> list[EntitySummary]:
        """Return the full catalog, assembling and caching it on first use.

        Raises:
            SourceUnavailable: The entity listing itself could not be fetched
        """
        cached = await self.cache.lookup(ALL_ENTITIES_KEY)
        if isinstance(cached, EntityCatalogPayload):
            return list(cached.entities)

        listing = await self._resolve_listing(self.catalog_size, 0)
        entities = await self.load_roster(listing.results)
        await self.cache.store_value(ALL_ENTITIES_KEY, EntityCatalogPayload(entities=entities))
        logger.info(f"Entity catalog assembled ({len(entities)} entities)")
        return entities

    async def warm_cache(self) -> None:
        """Populate the catalog cache; failure is logged, never raised."""
        try:
            await self.load_all()
        except SourceUnavailable as e:
            logger.warning(f"Cache warm-up failed: {e}")

    async def search(self, query: SearchQuery) -> list[EntitySummary]:
        """Filter the cached catalog in memory (never re-fetched per filter)."""
        entities = await self.load_all()
        matches = [entity for entity in entities if query.matches(entity)]
        return matches[: query.limit]

    async def load_page(self, limit: int = 20, offset: int = 0) -> EntityPage:
        """Load one page of the entity listing.

        Raises:
            SourceUnavailable: The listing page could not be fetched
        """
        listing = await self._resolve_listing(limit, offset)
        results = await self.load_roster(listing.results)
        return EntityPage(results=results, has_more=listing.next is not None, total=listing.count)


def to_roster_member(summary: EntitySummary, added_at: Optional[datetime] = None) -> RosterMember:
    """Convert an entity summary into a roster member."""
    return RosterMember(
        id=summary.id,
        canonical_name=summary.canonical_name,
        localized_name=summary.localized_name,
        type_tags=list(summary.type_tags),
        sprite_ref=summary.sprite_ref,
        added_at=added_at or datetime.now(),
    )
