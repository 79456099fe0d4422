"""Recommendation models for matchup suggestions."""

from dataclasses import asdict, dataclass, field

from effectivedex.models.team import RosterMember


@dataclass
class MatchupEffectiveness:
    """Aggregate multiplier of an attacker's types against defender types."""

    multiplier: float = 1.0
    reasons: list[str] = field(default_factory=list)


@dataclass
class RecommendationResult:
    """Roster members ranked against an opponent.

    ``reasons`` covers every non-neutral type pair examined, including pairs
    from members that did not qualify for ``ranked``.
    """

    ranked: list[RosterMember] = field(default_factory=list)
    reasons: list[str] = field(default_factory=list)
    multipliers: dict[int, float] = field(default_factory=dict)  # member id -> aggregate

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "ranked": [
                {**asdict(member), "multiplier": self.multipliers.get(member.id)}
                for member in self.ranked
            ],
            "reasons": list(self.reasons),
        }
