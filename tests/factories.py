"""Canned PokeAPI documents for tests."""

API = "https://pokeapi.co/api/v2"

# Subset of the real type chart, enough for the matchups under test
TYPE_CHART = {
    "normal": {
        "half_damage_to": ["rock", "steel"],
        "no_damage_to": ["ghost"],
        "double_damage_from": ["fighting"],
        "no_damage_from": ["ghost"],
    },
    "fire": {
        "double_damage_to": ["grass", "ice", "bug", "steel"],
        "half_damage_to": ["fire", "water", "rock", "dragon"],
        "double_damage_from": ["water", "ground", "rock"],
        "half_damage_from": ["fire", "grass", "ice", "bug", "steel", "fairy"],
    },
    "water": {
        "double_damage_to": ["fire", "ground", "rock"],
        "half_damage_to": ["water", "grass", "dragon"],
        "double_damage_from": ["grass", "electric"],
        "half_damage_from": ["fire", "water", "ice", "steel"],
    },
    "grass": {
        "double_damage_to": ["water", "ground", "rock"],
        "half_damage_to": ["fire", "grass", "poison", "flying", "bug", "dragon", "steel"],
        "double_damage_from": ["fire", "ice", "poison", "flying", "bug"],
        "half_damage_from": ["water", "electric", "grass", "ground"],
    },
    "ice": {
        "double_damage_to": ["grass", "ground", "flying", "dragon"],
        "half_damage_to": ["fire", "water", "ice", "steel"],
        "double_damage_from": ["fire", "fighting", "rock", "steel"],
        "half_damage_from": ["ice"],
    },
    "electric": {
        "double_damage_to": ["water", "flying"],
        "half_damage_to": ["electric", "grass", "dragon"],
        "no_damage_to": ["ground"],
        "double_damage_from": ["ground"],
        "half_damage_from": ["electric", "flying", "steel"],
    },
    "ground": {
        "double_damage_to": ["fire", "electric", "poison", "rock", "steel"],
        "half_damage_to": ["grass", "bug"],
        "no_damage_to": ["flying"],
        "double_damage_from": ["water", "grass", "ice"],
        "half_damage_from": ["poison", "rock"],
        "no_damage_from": ["electric"],
    },
    "flying": {
        "double_damage_to": ["grass", "fighting", "bug"],
        "half_damage_to": ["electric", "rock", "steel"],
        "double_damage_from": ["electric", "ice", "rock"],
        "half_damage_from": ["grass", "fighting", "bug"],
        "no_damage_from": ["ground"],
    },
    "ghost": {
        "double_damage_to": ["psychic", "ghost"],
        "half_damage_to": ["dark"],
        "no_damage_to": ["normal"],
        "double_damage_from": ["ghost", "dark"],
        "half_damage_from": ["poison", "bug"],
        "no_damage_from": ["normal", "fighting"],
    },
}

RELATION_KEYS = [
    "double_damage_from",
    "double_damage_to",
    "half_damage_from",
    "half_damage_to",
    "no_damage_from",
    "no_damage_to",
]


def ref(name: str, kind: str = "type", resource_id: int = 1) -> dict:
    return {"name": name, "url": f"{API}/{kind}/{resource_id}/"}


def type_doc(name: str, relations: dict | None = None) -> dict:
    relations = relations if relations is not None else TYPE_CHART.get(name, {})
    return {
        "id": 1,
        "name": name,
        "damage_relations": {key: [ref(t) for t in relations.get(key, [])] for key in RELATION_KEYS},
    }


def pokemon_doc(entity_id: int, name: str, types: list[str], artwork: str | None = None) -> dict:
    return {
        "id": entity_id,
        "name": name,
        "height": 4,
        "weight": 60,
        "types": [{"slot": i + 1, "type": ref(t)} for i, t in enumerate(types)],
        "sprites": {
            "front_default": f"https://img/{entity_id}.png",
            "other": {
                "official-artwork": {"front_default": artwork},
                "home": {"front_default": None},
            },
        },
        "species": ref(name, "pokemon-species", entity_id),
    }


def species_doc(
    entity_id: int,
    name: str,
    localized: str | None = None,
    generation: str = "generation-i",
) -> dict:
    names = [{"name": name.capitalize(), "language": {"name": "en", "url": ""}}]
    if localized:
        names.append({"name": localized, "language": {"name": "fr", "url": ""}})
    return {
        "id": entity_id,
        "name": name,
        "names": names,
        "generation": {"name": generation, "url": f"{API}/generation/1/"},
    }


def list_doc(entries: list[tuple[int, str]], count: int | None = None, has_next: bool = False) -> dict:
    return {
        "count": count if count is not None else len(entries),
        "next": f"{API}/pokemon?offset=20&limit=20" if has_next else None,
        "previous": None,
        "results": [ref(name, "pokemon", entity_id) for entity_id, name in entries],
    }


def add_entity(
    documents: dict,
    entity_id: int,
    name: str,
    types: list[str],
    localized: str | None = None,
    generation: str = "generation-i",
) -> None:
    documents[f"/pokemon/{entity_id}"] = pokemon_doc(entity_id, name, types)
    documents[f"/pokemon-species/{entity_id}"] = species_doc(entity_id, name, localized, generation)


def type_documents() -> dict:
    return {f"/type/{name}": type_doc(name) for name in TYPE_CHART}
