"""Centralized type tag normalization.

The canonical format is the lowercase English name used by the remote data
source: fire, water, grass, ...
"""

from typing import Iterable, Optional

# Canonical type tags in the data source's display order
TYPE_ORDER = [
    "normal", "fire", "water", "electric", "grass", "ice",
    "fighting", "poison", "ground", "flying", "psychic", "bug",
    "rock", "ghost", "dragon", "dark", "steel", "fairy",
]

CANONICAL_TYPES = frozenset(TYPE_ORDER)

# Localized (French) labels for display
TYPE_LABELS: dict[str, str] = {
    "normal": "Normal",
    "fire": "Feu",
    "water": "Eau",
    "electric": "Électrik",
    "grass": "Plante",
    "ice": "Glace",
    "fighting": "Combat",
    "poison": "Poison",
    "ground": "Sol",
    "flying": "Vol",
    "psychic": "Psy",
    "bug": "Insecte",
    "rock": "Roche",
    "ghost": "Spectre",
    "dragon": "Dragon",
    "dark": "Ténèbres",
    "steel": "Acier",
    "fairy": "Fée",
}


def normalize_type(type_tag: Optional[str]) -> Optional[str]:
    """Normalize a type tag to canonical lowercase format.

    Returns None for unknown tags.

    Examples:
        >>> normalize_type(" Fire ")
        'fire'
        >>> normalize_type("shadow") is None
        True
    """
    if type_tag is None:
        return None
    tag = type_tag.strip().lower()
    return tag if tag in CANONICAL_TYPES else None


def normalize_types_strict(type_tags: Iterable[str]) -> list[str]:
    """Normalize a sequence of type tags, dropping duplicates in order.

    Raises:
        ValueError: If any tag is not recognized
    """
    normalized: list[str] = []
    for tag in type_tags:
        canonical = normalize_type(tag)
        if canonical is None:
            raise ValueError(f"Unknown type: {tag}")
        if canonical not in normalized:
            normalized.append(canonical)
    return normalized


def localize_type(type_tag: str) -> str:
    """Return the display label for a type, or the tag itself if unknown."""
    return TYPE_LABELS.get(type_tag.lower(), type_tag)


def sort_types(type_tags: Iterable[str]) -> list[str]:
    """Sort type tags in canonical order; unknown tags go last."""
    def type_sort_key(tag: str) -> int:
        try:
            return TYPE_ORDER.index(tag)
        except ValueError:
            return 99

    return sorted(type_tags, key=type_sort_key)
