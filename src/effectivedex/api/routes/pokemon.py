"""REST endpoints for entity lookup, search and type effectiveness."""

from dataclasses import asdict
from typing import Annotated, Optional

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel, Field

from effectivedex.models.pokemon import SearchQuery
from effectivedex.utils.type_tags import TYPE_ORDER, localize_type, normalize_types_strict

router = APIRouter(prefix="/api", tags=["pokemon"])


class EffectivenessRequest(BaseModel):
    """Request body for classifying a type combination."""

    types: list[str] = Field(min_length=1, max_length=2)


@router.get("/pokemon")
async def search_pokemon(
    request: Request,
    q: str = "",
    types: Annotated[Optional[list[str]], Query()] = None,
    generation: Annotated[Optional[int], Query(ge=1)] = None,
    limit: Annotated[int, Query(ge=1, le=1000)] = 20,
):
    """Search the cached catalog by name, type and generation."""
    loader = request.app.state.loader
    query = SearchQuery(
        text=q,
        types=normalize_types_strict(types or []),
        generation=generation,
        limit=limit,
    )
    results = await loader.search(query)
    return {"results": [asdict(entity) for entity in results]}


@router.get("/pokemon/page")
async def get_pokemon_page(
    request: Request,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """One page of the entity listing for incremental browsing."""
    page = await request.app.state.loader.load_page(limit, offset)
    return {
        "results": [asdict(entity) for entity in page.results],
        "has_more": page.has_more,
        "total": page.total,
    }


@router.get("/pokemon/{id_or_name}")
async def get_pokemon(request: Request, id_or_name: str):
    """Entity summary with its effectiveness profile."""
    summary = await request.app.state.loader.resolve_entity_summary(id_or_name.lower())
    profile = await request.app.state.engine.classify(summary.type_tags)
    return {"pokemon": asdict(summary), "effectiveness": profile.to_dict()}


@router.get("/types")
async def list_types():
    """All canonical type tags with display labels."""
    return {"types": [{"name": tag, "label": localize_type(tag)} for tag in TYPE_ORDER]}


@router.post("/effectiveness")
async def classify_types(request: Request, body: EffectivenessRequest):
    """Defensive and offensive classification for a type combination."""
    profile = await request.app.state.engine.classify(body.types)
    return profile.to_dict()
