"""REST endpoints for rosters and matchup recommendations."""

from dataclasses import asdict

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, Field

from effectivedex.services.bulk_loader import to_roster_member

router = APIRouter(prefix="/api", tags=["teams"])


class CreateTeamRequest(BaseModel):
    """Request body for creating a roster."""

    name: str = Field(min_length=1)
    is_main: bool = False


class RenameTeamRequest(BaseModel):
    name: str = Field(min_length=1)


class AddMemberRequest(BaseModel):
    """Entity to add, resolved server-side into a roster member."""

    pokemon_id: int = Field(ge=1)


class RecommendationRequest(BaseModel):
    opponent_types: list[str] = Field(default_factory=list)


class ImportTeamsRequest(BaseModel):
    document: str


async def _member_from_request(request: Request, body: AddMemberRequest):
    summary = await request.app.state.loader.resolve_entity_summary(body.pokemon_id)
    return to_roster_member(summary)


@router.get("/teams")
async def list_teams(request: Request):
    """All rosters, main first then newest first."""
    rosters = await request.app.state.team_store.list_all()
    return {"teams": [asdict(r) for r in rosters]}


@router.post("/teams", status_code=201)
async def create_team(request: Request, body: CreateTeamRequest):
    roster = await request.app.state.team_store.create(body.name, body.is_main)
    return asdict(roster)


@router.get("/teams/stats")
async def get_team_stats(request: Request):
    stats = await request.app.state.team_store.stats()
    return asdict(stats)


@router.get("/teams/export")
async def export_teams(request: Request):
    document = await request.app.state.team_store.export_json()
    return Response(content=document, media_type="application/json")


@router.post("/teams/import")
async def import_teams(request: Request, body: ImportTeamsRequest):
    imported = await request.app.state.team_store.import_json(body.document)
    return {"imported": len(imported)}


@router.post("/teams/main/members")
async def add_to_main_team(request: Request, body: AddMemberRequest):
    """Add an entity to the main roster, creating it if needed."""
    member = await _member_from_request(request, body)
    roster = await request.app.state.team_store.add_to_main(member)
    return asdict(roster)


@router.get("/teams/{roster_id}")
async def get_team(request: Request, roster_id: str):
    roster = await request.app.state.team_store.get(roster_id)
    return asdict(roster)


@router.patch("/teams/{roster_id}")
async def rename_team(request: Request, roster_id: str, body: RenameTeamRequest):
    roster = await request.app.state.team_store.rename(roster_id, body.name)
    return asdict(roster)


@router.delete("/teams/{roster_id}", status_code=204)
async def delete_team(request: Request, roster_id: str):
    await request.app.state.team_store.delete(roster_id)
    return Response(status_code=204)


@router.post("/teams/{roster_id}/main")
async def set_main_team(request: Request, roster_id: str):
    roster = await request.app.state.team_store.set_main(roster_id)
    return asdict(roster)


@router.post("/teams/{roster_id}/members")
async def add_team_member(request: Request, roster_id: str, body: AddMemberRequest):
    """Add an entity to a roster (409 when full or already present)."""
    # Roster existence is checked before the remote lookup
    await request.app.state.team_store.get(roster_id)
    member = await _member_from_request(request, body)
    roster = await request.app.state.team_store.add_member(roster_id, member)
    return asdict(roster)


@router.delete("/teams/{roster_id}/members/{member_id}")
async def remove_team_member(request: Request, roster_id: str, member_id: int):
    roster = await request.app.state.team_store.remove_member(roster_id, member_id)
    return asdict(roster)


@router.post("/teams/{roster_id}/recommendations")
async def recommend_from_team(request: Request, roster_id: str, body: RecommendationRequest):
    """Rank a roster's members against the opponent's types."""
    result = await request.app.state.scorer.recommend_for_roster(body.opponent_types, roster_id)
    return result.to_dict()


@router.post("/recommendations/main")
async def recommend_from_main_team(request: Request, body: RecommendationRequest):
    result = await request.app.state.scorer.recommend_for_main(body.opponent_types)
    return result.to_dict()
