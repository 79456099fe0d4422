"""Tagged records for remote payloads and cached aggregates.

Every record carries a ``kind`` discriminator so cache entries can be
persisted as JSON and revived into the right model without inspecting
the key they were stored under.
"""

import re
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from effectivedex.models.pokemon import EntitySummary, TypeRelations

ROMAN_NUMERALS = {"i": 1, "v": 5, "x": 10}


def parse_generation(generation_name: str, generation_url: str = "") -> int:
    """Parse a generation reference into its number, defaulting to 1.

    Accepts ``generation-iv``, ``generation-4`` or a ``/generation/4/`` URL.

    Examples:
        >>> parse_generation("generation-iv")
        4
        >>> parse_generation("generation-9")
        9
    """
    match = re.fullmatch(r"generation-(\w+)", generation_name.strip().lower())
    if match:
        suffix = match.group(1)
        if suffix.isdigit():
            return max(int(suffix), 1)
        if all(ch in ROMAN_NUMERALS for ch in suffix):
            total = 0
            for i, ch in enumerate(suffix):
                value = ROMAN_NUMERALS[ch]
                if i + 1 < len(suffix) and ROMAN_NUMERALS[suffix[i + 1]] > value:
                    total -= value
                else:
                    total += value
            if total >= 1:
                return total

    url_id = extract_id_from_url(generation_url)
    return url_id if url_id else 1


def extract_id_from_url(url: str) -> int:
    """Extract the trailing numeric id from a resource URL, 0 if absent."""
    match = re.search(r"/(\d+)/?$", url or "")
    return int(match.group(1)) if match else 0


class NamedRef(BaseModel):
    """Reference to another remote resource."""

    name: str
    url: str = ""

    @property
    def resource_id(self) -> int:
        return extract_id_from_url(self.url)


class TypeSlot(BaseModel):
    slot: int = 1
    type: NamedRef


class ArtworkSprite(BaseModel):
    front_default: Optional[str] = None


class OtherSprites(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    official_artwork: Optional[ArtworkSprite] = Field(default=None, alias="official-artwork")
    home: Optional[ArtworkSprite] = None


class Sprites(BaseModel):
    front_default: Optional[str] = None
    other: Optional[OtherSprites] = None


class PokemonPayload(BaseModel):
    """Base entity resource (``/pokemon/{id}``)."""

    kind: Literal["pokemon"] = "pokemon"
    id: int = Field(ge=1)
    name: str
    types: list[TypeSlot] = Field(min_length=1)
    sprites: Sprites = Field(default_factory=Sprites)
    species: Optional[NamedRef] = None

    def type_tags(self) -> tuple[str, ...]:
        return tuple(t.type.name for t in sorted(self.types, key=lambda t: t.slot))

    def best_sprite(self) -> Optional[str]:
        """Official artwork, then home render, then the default front sprite."""
        other = self.sprites.other
        if other is not None:
            if other.official_artwork and other.official_artwork.front_default:
                return other.official_artwork.front_default
            if other.home and other.home.front_default:
                return other.home.front_default
        return self.sprites.front_default


class LocalizedName(BaseModel):
    name: str
    language: NamedRef


class SpeciesPayload(BaseModel):
    """Species metadata resource (``/pokemon-species/{id}``)."""

    kind: Literal["pokemon-species"] = "pokemon-species"
    id: int = Field(ge=1)
    name: str
    names: list[LocalizedName] = Field(default_factory=list)
    generation: NamedRef

    def localized_name(self, language: str) -> Optional[str]:
        for entry in self.names:
            if entry.language.name == language:
                return entry.name
        return None

    def generation_number(self) -> int:
        return parse_generation(self.generation.name, self.generation.url)


class DamageRelations(BaseModel):
    double_damage_from: list[NamedRef] = Field(default_factory=list)
    double_damage_to: list[NamedRef] = Field(default_factory=list)
    half_damage_from: list[NamedRef] = Field(default_factory=list)
    half_damage_to: list[NamedRef] = Field(default_factory=list)
    no_damage_from: list[NamedRef] = Field(default_factory=list)
    no_damage_to: list[NamedRef] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_disjoint(self) -> "DamageRelations":
        """A type may appear in at most one "from" and one "to" relation."""
        for direction, groups in (
            ("from", (self.double_damage_from, self.half_damage_from, self.no_damage_from)),
            ("to", (self.double_damage_to, self.half_damage_to, self.no_damage_to)),
        ):
            seen: set[str] = set()
            for group in groups:
                names = {ref.name for ref in group}
                overlap = seen & names
                if overlap:
                    raise ValueError(
                        f"Contradictory damage_{direction} relations for: {sorted(overlap)}"
                    )
                seen |= names
        return self


class TypePayload(BaseModel):
    """Type resource (``/type/{name}``)."""

    kind: Literal["type"] = "type"
    id: int
    name: str
    damage_relations: DamageRelations

    def to_relations(self) -> TypeRelations:
        rel = self.damage_relations

        def names(refs: list[NamedRef]) -> frozenset[str]:
            return frozenset(ref.name for ref in refs)

        return TypeRelations(
            type_tag=self.name,
            double_from=names(rel.double_damage_from),
            double_to=names(rel.double_damage_to),
            half_from=names(rel.half_damage_from),
            half_to=names(rel.half_damage_to),
            none_from=names(rel.no_damage_from),
            none_to=names(rel.no_damage_to),
        )


class ResourceListPayload(BaseModel):
    """Paginated resource listing (``/pokemon?limit=&offset=``)."""

    kind: Literal["resource-list"] = "resource-list"
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: list[NamedRef] = Field(default_factory=list)


class EntityCatalogPayload(BaseModel):
    """Assembled entity catalog cached under an aggregate key."""

    kind: Literal["entity-catalog"] = "entity-catalog"
    entities: list[EntitySummary] = Field(default_factory=list)


CachePayload = Annotated[
    Union[
        PokemonPayload,
        SpeciesPayload,
        TypePayload,
        ResourceListPayload,
        EntityCatalogPayload,
    ],
    Field(discriminator="kind"),
]

# Resource path segment -> payload model
RESOURCE_MODELS: dict[str, type[BaseModel]] = {
    "pokemon": PokemonPayload,
    "pokemon-species": SpeciesPayload,
    "type": TypePayload,
}
