"""Data models for effectivedex."""

from effectivedex.models.pokemon import (
    EffectivenessProfile,
    EntityPage,
    EntitySummary,
    SearchQuery,
    TypeRelations,
)
from effectivedex.models.team import MAX_ROSTER_SIZE, Roster, RosterMember, TeamStats
from effectivedex.models.recommendations import (
    MatchupEffectiveness,
    RecommendationResult,
)
from effectivedex.models.cache import CacheEntry

__all__ = [
    "CacheEntry",
    "EffectivenessProfile",
    "EntityPage",
    "EntitySummary",
    "SearchQuery",
    "TypeRelations",
    "MAX_ROSTER_SIZE",
    "Roster",
    "RosterMember",
    "TeamStats",
    "MatchupEffectiveness",
    "RecommendationResult",
]
