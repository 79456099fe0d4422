"""Ranks roster members against an opponent's types."""

import logging
from typing import Sequence

from effectivedex.errors import SourceUnavailable
from effectivedex.models.recommendations import RecommendationResult
from effectivedex.models.team import RosterMember
from effectivedex.repositories.team_store import TeamStore
from effectivedex.services.effectiveness_engine import EffectivenessEngine
from effectivedex.utils.type_tags import normalize_types_strict

logger = logging.getLogger(__name__)


class RecommendationScorer:
    """Scores each member by aggregate offensive multiplier vs the opponent."""

    def __init__(self, engine: EffectivenessEngine, team_store: TeamStore):
        self.engine = engine
        self.team_store = team_store

    async def recommend(
        self,
        opponent_types: Sequence[str],
        roster: Sequence[RosterMember],
    ) -> RecommendationResult:
        """Rank members whose aggregate multiplier exceeds 1.

        Ranking is descending by multiplier and stable on ties. Reasons are
        collected for every member examined, ranked or not.
        """
        opponent = normalize_types_strict(opponent_types)
        result = RecommendationResult()
        if not opponent or not roster:
            return result

        scored: list[tuple[float, RosterMember]] = []
        for member in roster:
            try:
                matchup = await self.engine.matchup(member.type_tags, opponent)
            except SourceUnavailable as e:
                logger.warning(f"Skipping member {member.canonical_name}: {e}")
                continue

            result.reasons.extend(matchup.reasons)
            if matchup.multiplier > 1:
                scored.append((matchup.multiplier, member))

        # sorted() is stable, so ties keep roster order
        scored = sorted(scored, key=lambda item: item[0], reverse=True)
        result.ranked = [member for _, member in scored]
        result.multipliers = {member.id: multiplier for multiplier, member in scored}
        return result

    async def recommend_for_roster(
        self,
        opponent_types: Sequence[str],
        roster_id: str,
    ) -> RecommendationResult:
        """Recommend from a stored roster.

        Raises:
            NotFound: No roster with this id
        """
        roster = await self.team_store.get(roster_id)
        return await self.recommend(opponent_types, roster.members)

    async def recommend_for_main(self, opponent_types: Sequence[str]) -> RecommendationResult:
        """Recommend from the main roster; empty when there is none."""
        main = await self.team_store.get_main()
        if main is None:
            return RecommendationResult()
        return await self.recommend(opponent_types, main.members)
