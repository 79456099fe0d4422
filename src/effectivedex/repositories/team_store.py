"""Persisted roster collection.

Every operation reads the whole collection document, applies one mutation
and writes the whole document back. There is no version token: concurrent
mutations are last-writer-wins at the document level.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from pydantic import TypeAdapter, ValidationError

from effectivedex.errors import DuplicateMember, NotFound, PersistenceFailure, RosterFull
from effectivedex.models.team import MAX_ROSTER_SIZE, Roster, RosterMember, TeamStats
from effectivedex.repositories.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

TEAMS_STORAGE_KEY = "effectivedex_teams"
DEFAULT_MAIN_ROSTER_NAME = "My Main Team"

_rosters_adapter = TypeAdapter(list[Roster])


def generate_roster_id() -> str:
    return f"team_{uuid.uuid4().hex[:12]}"


class TeamStore:
    """CRUD over rosters enforcing capacity, uniqueness and single-main."""

    def __init__(self, store: KeyValueStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self._clock = clock

    async def _load(self) -> list[Roster]:
        raw = await self.store.get(TEAMS_STORAGE_KEY)
        if raw is None:
            return []
        try:
            return _rosters_adapter.validate_json(raw)
        except ValidationError as e:
            raise PersistenceFailure(f"Stored team document is unreadable: {e}") from e

    async def _save(self, rosters: list[Roster]) -> None:
        try:
            await self.store.set(TEAMS_STORAGE_KEY, _rosters_adapter.dump_json(rosters).decode())
        except PersistenceFailure:
            logger.error(f"Failed to save {len(rosters)} rosters")
            raise

    @staticmethod
    def _find(rosters: list[Roster], roster_id: str) -> Roster:
        for roster in rosters:
            if roster.id == roster_id:
                return roster
        raise NotFound(f"Roster not found: {roster_id}")

    def _demote_all(self, rosters: list[Roster], now: datetime, keep_id: Optional[str] = None) -> None:
        for roster in rosters:
            if roster.is_main and roster.id != keep_id:
                roster.is_main = False
                roster.updated_at = now

    async def list_all(self) -> list[Roster]:
        """All rosters: main first, then newest first."""
        rosters = await self._load()
        return sorted(rosters, key=lambda r: (not r.is_main, -r.created_at.timestamp()))

    async def get(self, roster_id: str) -> Roster:
        """Raises NotFound if absent."""
        return self._find(await self._load(), roster_id)

    async def get_main(self) -> Optional[Roster]:
        for roster in await self._load():
            if roster.is_main:
                return roster
        return None

    async def create(self, name: str, is_main: bool = False) -> Roster:
        """Create an empty roster; a new main roster demotes the others first."""
        rosters = await self._load()
        now = self._clock()
        if is_main:
            self._demote_all(rosters, now)

        roster = Roster(
            id=generate_roster_id(),
            name=name,
            is_main=is_main,
            created_at=now,
            updated_at=now,
        )
        rosters.append(roster)
        await self._save(rosters)
        logger.info(f"Created roster {roster.id} ({name!r}, main={is_main})")
        return roster

    async def rename(self, roster_id: str, name: str) -> Roster:
        rosters = await self._load()
        roster = self._find(rosters, roster_id)
        roster.name = name
        roster.updated_at = self._clock()
        await self._save(rosters)
        return roster

    async def add_member(self, roster_id: str, member: RosterMember) -> Roster:
        """Append a member.

        Raises:
            NotFound: No roster with this id
            RosterFull: Roster already has the maximum number of members
            DuplicateMember: Member id already present
        """
        rosters = await self._load()
        roster = self._find(rosters, roster_id)
        if len(roster.members) >= MAX_ROSTER_SIZE:
            raise RosterFull(f"Roster {roster_id} already has {MAX_ROSTER_SIZE} members")
        if roster.has_member(member.id):
            raise DuplicateMember(f"Member {member.id} is already in roster {roster_id}")

        roster.members.append(member)
        roster.updated_at = self._clock()
        await self._save(rosters)
        return roster

    async def remove_member(self, roster_id: str, member_id: int) -> Roster:
        """Remove a member; removing an absent member is a no-op on the list."""
        rosters = await self._load()
        roster = self._find(rosters, roster_id)
        roster.members = [m for m in roster.members if m.id != member_id]
        roster.updated_at = self._clock()
        await self._save(rosters)
        return roster

    async def set_main(self, roster_id: str) -> Roster:
        """Flag one roster as main and unset every other in the same write.

        Raises:
            NotFound: No roster with this id (store left untouched)
        """
        rosters = await self._load()
        target = self._find(rosters, roster_id)
        now = self._clock()
        self._demote_all(rosters, now, keep_id=roster_id)
        target.is_main = True
        target.updated_at = now
        await self._save(rosters)
        return target

    async def delete(self, roster_id: str) -> None:
        """Raises NotFound (store unchanged) if no roster matched."""
        rosters = await self._load()
        remaining = [r for r in rosters if r.id != roster_id]
        if len(remaining) == len(rosters):
            raise NotFound(f"Roster not found: {roster_id}")
        await self._save(remaining)
        logger.info(f"Deleted roster {roster_id}")

    async def add_to_main(self, member: RosterMember) -> Roster:
        """Add to the main roster, creating one if none exists."""
        main = await self.get_main()
        if main is None:
            main = await self.create(DEFAULT_MAIN_ROSTER_NAME, is_main=True)
        return await self.add_member(main.id, member)

    async def remove_from_main(self, member_id: int) -> Optional[Roster]:
        main = await self.get_main()
        if main is None:
            return None
        return await self.remove_member(main.id, member_id)

    async def stats(self) -> TeamStats:
        rosters = await self._load()
        total_members = sum(len(r.members) for r in rosters)
        main = next((r for r in rosters if r.is_main), None)
        return TeamStats(
            total_rosters=len(rosters),
            total_members=total_members,
            average_members=total_members / len(rosters) if rosters else 0.0,
            main_roster_size=len(main.members) if main else 0,
        )

    async def export_json(self) -> str:
        rosters = await self.list_all()
        return _rosters_adapter.dump_json(rosters, indent=2).decode()

    async def import_json(self, document: str) -> list[Roster]:
        """Merge exported rosters into the store.

        Imported ids that clash get fresh ids; an imported main roster
        demotes every existing one.

        Raises:
            ValueError: Document is not a valid roster list
        """
        try:
            imported = _rosters_adapter.validate_json(document)
        except ValidationError as e:
            raise ValueError(f"Cannot import rosters: invalid format ({e})") from e

        rosters = await self._load()
        now = self._clock()
        for roster in imported:
            if len(roster.members) > MAX_ROSTER_SIZE:
                raise ValueError(f"Cannot import roster {roster.name!r}: more than {MAX_ROSTER_SIZE} members")
            if len({m.id for m in roster.members}) != len(roster.members):
                raise ValueError(f"Cannot import roster {roster.name!r}: duplicate members")
            if any(r.id == roster.id for r in rosters):
                roster.id = generate_roster_id()
            if roster.is_main:
                self._demote_all(rosters, now)
            rosters.append(roster)

        await self._save(rosters)
        logger.info(f"Imported {len(imported)} rosters")
        return imported

    async def clear_all(self) -> None:
        await self.store.delete(TEAMS_STORAGE_KEY)
