"""Cache maintenance endpoints."""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/cache", tags=["cache"])


@router.post("/clear")
async def clear_cache(request: Request):
    """Drop every cached remote resource (memory and persistent)."""
    await request.app.state.cache.clear()
    return {"status": "cleared"}


@router.post("/warm")
async def warm_cache(request: Request):
    """Assemble the entity catalog now; failures are logged, not returned."""
    await request.app.state.loader.warm_cache()
    return {"status": "warmed", "memory_entries": request.app.state.cache.memory_size()}
