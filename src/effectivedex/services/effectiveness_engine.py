"""Type-effectiveness aggregation over cached damage relations."""

import asyncio
import logging
from typing import Iterable, Optional, Sequence

from effectivedex.errors import SourceUnavailable
from effectivedex.models.payloads import TypePayload
from effectivedex.models.pokemon import EffectivenessProfile, TypeRelations
from effectivedex.models.recommendations import MatchupEffectiveness
from effectivedex.services.remote_source import type_path
from effectivedex.services.tiered_cache import TieredCache
from effectivedex.utils.type_tags import TYPE_ORDER, normalize_types_strict

logger = logging.getLogger(__name__)


def defensive_multiplier(own_relations: Sequence[TypeRelations], attacking_type: str) -> float:
    """Product over the defender's types of the damage each takes.

    A 0 from any own type makes the whole product 0.
    """
    multiplier = 1.0
    for relations in own_relations:
        multiplier *= relations.damage_taken_from(attacking_type)
    return multiplier


def offensive_multiplier(own_relations: Sequence[TypeRelations], defending_type: str) -> float:
    """Best single-type multiplier among the attacker's types.

    MAX rather than product: only the best-matching move type has to
    connect. A target is only reported < 1 when every own type is resisted.
    """
    if not own_relations:
        return 1.0
    return max(relations.damage_dealt_to(defending_type) for relations in own_relations)


def classify_relations(
    type_tags: Sequence[str],
    own_relations: Sequence[TypeRelations],
    candidates: Iterable[str] = TYPE_ORDER,
) -> EffectivenessProfile:
    """Bucket every candidate type by defensive and offensive multiplier.

    Neutral (exactly 1) types land in no bucket.
    """
    weak_to: set[str] = set()
    resistant_to: set[str] = set()
    strong_against: set[str] = set()
    weak_against: set[str] = set()

    for candidate in candidates:
        defense = defensive_multiplier(own_relations, candidate)
        if defense > 1:
            weak_to.add(candidate)
        elif defense < 1:
            resistant_to.add(candidate)

        offense = offensive_multiplier(own_relations, candidate)
        if offense > 1:
            strong_against.add(candidate)
        elif offense < 1:
            weak_against.add(candidate)

    return EffectivenessProfile(
        type_tags=tuple(type_tags),
        weak_to=frozenset(weak_to),
        resistant_to=frozenset(resistant_to),
        strong_against=frozenset(strong_against),
        weak_against=frozenset(weak_against),
    )


def describe_pair(attacker_type: str, defender_type: str, multiplier: float) -> Optional[str]:
    """Human-readable sentence for a non-neutral type pair."""
    if multiplier > 1:
        return f"{attacker_type} is super effective against {defender_type}"
    if multiplier == 0:
        return f"{attacker_type} has no effect on {defender_type}"
    if multiplier < 1:
        return f"{attacker_type} is not very effective against {defender_type}"
    return None


def matchup_relations(
    attacker_relations: Sequence[TypeRelations],
    defender_types: Sequence[str],
) -> MatchupEffectiveness:
    """Aggregate multiplier over the full attacker x defender cross product."""
    result = MatchupEffectiveness()
    for relations in attacker_relations:
        for defender_type in defender_types:
            pair_multiplier = relations.damage_dealt_to(defender_type)
            result.multiplier *= pair_multiplier
            reason = describe_pair(relations.type_tag, defender_type, pair_multiplier)
            if reason:
                result.reasons.append(reason)
    return result


class EffectivenessEngine:
    """Classifies type combinations using relations resolved via the cache."""

    def __init__(self, cache: TieredCache):
        self.cache = cache

    async def get_relations(self, type_tag: str) -> TypeRelations:
        """Damage relations for one type.

        Raises:
            SourceUnavailable: The type resource could not be resolved
        """
        key = type_path(type_tag)
        payload = await self.cache.resolve(key)
        if not isinstance(payload, TypePayload):
            raise SourceUnavailable(key, f"unexpected payload kind {getattr(payload, 'kind', None)}")
        return payload.to_relations()

    async def _try_relations(self, type_tag: str) -> Optional[TypeRelations]:
        try:
            return await self.get_relations(type_tag)
        except SourceUnavailable as e:
            logger.warning(f"Skipping type {type_tag}: {e}")
            return None

    async def resolve_all(self, type_tags: Sequence[str]) -> list[TypeRelations]:
        """Relations for each type, in order, dropping unavailable ones."""
        results = await asyncio.gather(*(self._try_relations(tag) for tag in type_tags))
        return [relations for relations in results if relations is not None]

    async def classify(self, type_tags: Sequence[str]) -> EffectivenessProfile:
        """Defensive/offensive profile for a 1- or 2-type combination.

        Raises:
            ValueError: Unknown type tag, or no tags at all
            SourceUnavailable: None of the types could be resolved
        """
        tags = normalize_types_strict(type_tags)
        if not tags:
            raise ValueError("At least one type is required")
        own_relations = await self.resolve_all(tags)
        if not own_relations:
            raise SourceUnavailable(",".join(type_path(tag) for tag in tags), "no type relations available")
        return classify_relations(tags, own_relations)

    async def matchup(
        self,
        attacker_types: Sequence[str],
        defender_types: Sequence[str],
    ) -> MatchupEffectiveness:
        """Aggregate offensive multiplier of attacker types vs defender types.

        Raises:
            SourceUnavailable: Relations for an attacker type are unavailable
        """
        attacker_relations = [await self.get_relations(tag) for tag in attacker_types]
        return matchup_relations(attacker_relations, defender_types)
