"""Entity and type-effectiveness models."""

from dataclasses import dataclass, field
from typing import Optional

from effectivedex.utils.type_tags import sort_types


@dataclass(frozen=True)
class EntitySummary:
    """Normalized view of one entity (base resource + species metadata)."""

    id: int
    canonical_name: str
    localized_name: str
    type_tags: tuple[str, ...]  # 1 or 2 tags, slot order
    sprite_ref: Optional[str] = None
    generation: int = 1

    def matches_name(self, query: str) -> bool:
        """Case-insensitive substring match over canonical and localized names."""
        needle = query.strip().lower()
        return needle in self.canonical_name.lower() or needle in self.localized_name.lower()


@dataclass(frozen=True)
class TypeRelations:
    """Damage relations for a single type tag."""

    type_tag: str
    double_from: frozenset[str] = frozenset()
    double_to: frozenset[str] = frozenset()
    half_from: frozenset[str] = frozenset()
    half_to: frozenset[str] = frozenset()
    none_from: frozenset[str] = frozenset()
    none_to: frozenset[str] = frozenset()

    def damage_taken_from(self, attacking_type: str) -> float:
        """Multiplier this type takes from an attacking type."""
        if attacking_type in self.double_from:
            return 2.0
        if attacking_type in self.half_from:
            return 0.5
        if attacking_type in self.none_from:
            return 0.0
        return 1.0

    def damage_dealt_to(self, defending_type: str) -> float:
        """Multiplier this type deals to a defending type."""
        if defending_type in self.double_to:
            return 2.0
        if defending_type in self.half_to:
            return 0.5
        if defending_type in self.none_to:
            return 0.0
        return 1.0


@dataclass(frozen=True)
class EffectivenessProfile:
    """Defensive and offensive classification for a type combination."""

    type_tags: tuple[str, ...]
    weak_to: frozenset[str] = frozenset()
    resistant_to: frozenset[str] = frozenset()
    strong_against: frozenset[str] = frozenset()
    weak_against: frozenset[str] = frozenset()

    def to_dict(self) -> dict:
        """Serialize with buckets in canonical type order."""
        return {
            "type_tags": list(self.type_tags),
            "weak_to": sort_types(self.weak_to),
            "resistant_to": sort_types(self.resistant_to),
            "strong_against": sort_types(self.strong_against),
            "weak_against": sort_types(self.weak_against),
        }


@dataclass
class SearchQuery:
    """In-memory filter over the entity catalog."""

    text: str = ""
    types: list[str] = field(default_factory=list)
    generation: Optional[int] = None
    limit: int = 20

    def matches(self, entity: EntitySummary) -> bool:
        if self.text and not entity.matches_name(self.text):
            return False
        if self.types and not any(t in self.types for t in entity.type_tags):
            return False
        if self.generation is not None and entity.generation != self.generation:
            return False
        return True


@dataclass
class EntityPage:
    """One page of the entity list for incremental browsing."""

    results: list[EntitySummary]
    has_more: bool
    total: int
