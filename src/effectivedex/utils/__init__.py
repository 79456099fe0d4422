"""Utility modules for effectivedex."""

from effectivedex.utils.type_tags import (
    CANONICAL_TYPES,
    TYPE_LABELS,
    TYPE_ORDER,
    localize_type,
    normalize_type,
    normalize_types_strict,
    sort_types,
)

__all__ = [
    "CANONICAL_TYPES",
    "TYPE_LABELS",
    "TYPE_ORDER",
    "localize_type",
    "normalize_type",
    "normalize_types_strict",
    "sort_types",
]
