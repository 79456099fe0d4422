"""Tests for payload parsing helpers and type tag normalization."""

import pytest

from effectivedex.models.cache import CacheEntry
from effectivedex.models.payloads import (
    EntityCatalogPayload,
    SpeciesPayload,
    extract_id_from_url,
    parse_generation,
)
from effectivedex.models.pokemon import EntitySummary
from effectivedex.utils.type_tags import localize_type, normalize_type, normalize_types_strict, sort_types
from tests.factories import species_doc


@pytest.mark.parametrize(
    "name, url, expected",
    [
        ("generation-i", "", 1),
        ("generation-iv", "", 4),
        ("generation-ix", "", 9),
        ("generation-7", "", 7),
        ("generation-unknown", "https://pokeapi.co/api/v2/generation/3/", 3),
        ("", "", 1),
    ],
)
def test_parse_generation(name, url, expected):
    assert parse_generation(name, url) == expected


def test_extract_id_from_url():
    assert extract_id_from_url("https://pokeapi.co/api/v2/pokemon/25/") == 25
    assert extract_id_from_url("https://pokeapi.co/api/v2/pokemon/25") == 25
    assert extract_id_from_url("") == 0


def test_species_localized_name():
    species = SpeciesPayload.model_validate(species_doc(4, "charmander", "Salamèche"))

    assert species.localized_name("fr") == "Salamèche"
    assert species.localized_name("de") is None
    assert species.generation_number() == 1


def test_cache_entry_round_trips_through_json():
    catalog = EntityCatalogPayload(entities=[EntitySummary(25, "pikachu", "Pikachu", ("electric",))])
    entry = CacheEntry(value=catalog, fetched_at=100.0)

    revived = CacheEntry.model_validate_json(entry.model_dump_json(by_alias=True))

    assert isinstance(revived.value, EntityCatalogPayload)
    assert revived.value.entities[0] == catalog.entities[0]
    assert revived.is_live(now=199.0, ttl_seconds=100)
    assert not revived.is_live(now=200.0, ttl_seconds=100)


def test_normalize_type():
    assert normalize_type(" Fire ") == "fire"
    assert normalize_type("shadow") is None
    assert normalize_type(None) is None


def test_normalize_types_strict():
    assert normalize_types_strict(["Water", "water", "ice"]) == ["water", "ice"]
    with pytest.raises(ValueError):
        normalize_types_strict(["water", "???"])


def test_sort_and_localize():
    assert sort_types(["fairy", "fire", "zzz", "normal"]) == ["normal", "fire", "fairy", "zzz"]
    assert localize_type("fire") == "Feu"
    assert localize_type("zzz") == "zzz"
