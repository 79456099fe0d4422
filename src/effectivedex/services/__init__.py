"""Business logic services."""

from effectivedex.services.bulk_loader import BulkLoader, normalize_entity, to_roster_member
from effectivedex.services.effectiveness_engine import EffectivenessEngine
from effectivedex.services.recommendation_scorer import RecommendationScorer
from effectivedex.services.remote_source import PokeApiClient, RemoteSource, StaticRemoteSource
from effectivedex.services.tiered_cache import TieredCache

__all__ = [
    "BulkLoader",
    "EffectivenessEngine",
    "PokeApiClient",
    "RecommendationScorer",
    "RemoteSource",
    "StaticRemoteSource",
    "TieredCache",
    "normalize_entity",
    "to_roster_member",
]
