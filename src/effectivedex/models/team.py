"""Roster (team) models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

MAX_ROSTER_SIZE = 6


@dataclass
class RosterMember:
    """An entity added to a roster."""

    id: int
    canonical_name: str
    type_tags: list[str]
    localized_name: Optional[str] = None
    sprite_ref: Optional[str] = None
    added_at: datetime = field(default_factory=datetime.now)


@dataclass
class Roster:
    """A user-curated team of up to six members."""

    id: str
    name: str
    members: list[RosterMember] = field(default_factory=list)
    is_main: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_full(self) -> bool:
        return len(self.members) >= MAX_ROSTER_SIZE

    def has_member(self, member_id: int) -> bool:
        return any(m.id == member_id for m in self.members)


@dataclass
class TeamStats:
    """Aggregate counts across all rosters."""

    total_rosters: int
    total_members: int
    average_members: float
    main_roster_size: int
