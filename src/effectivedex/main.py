"""FastAPI application entry point."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from effectivedex.api.error_handlers import register_error_handlers
from effectivedex.api.routes.cache import router as cache_router
from effectivedex.api.routes.pokemon import router as pokemon_router
from effectivedex.api.routes.teams import router as teams_router
from effectivedex.config import Settings, settings
from effectivedex.repositories.kv_store import KeyValueStore
from effectivedex.repositories.team_store import TeamStore
from effectivedex.services.bulk_loader import BulkLoader
from effectivedex.services.effectiveness_engine import EffectivenessEngine
from effectivedex.services.recommendation_scorer import RecommendationScorer
from effectivedex.services.remote_source import PokeApiClient, RemoteSource
from effectivedex.services.tiered_cache import TieredCache

logger = logging.getLogger(__name__)

logging.getLogger("effectivedex").setLevel(settings.log_level.upper())


# Database path - use settings or default to data/effectivedex.duckdb in repo root
def get_database_path() -> Path:
    """Get the database path from settings or default location."""
    repo_root = Path(__file__).parent.parent.parent
    if settings.database_path:
        db_path = Path(settings.database_path)
        if db_path.is_absolute():
            return db_path
        return repo_root / settings.database_path
    return repo_root / "data" / "effectivedex.duckdb"


def attach_services(
    app: FastAPI,
    config: Settings = settings,
    remote: Optional[RemoteSource] = None,
    store: Optional[KeyValueStore] = None,
) -> None:
    """Build the core once and attach it to app.state for injection."""
    if remote is None:
        remote = PokeApiClient(config.api_base_url, timeout=config.http_timeout)
    if store is None:
        store = KeyValueStore(get_database_path())

    cache = TieredCache(remote, store, ttl_seconds=config.cache_ttl_seconds)
    team_store = TeamStore(store)
    engine = EffectivenessEngine(cache)

    app.state.remote = remote
    app.state.kv_store = store
    app.state.cache = cache
    app.state.loader = BulkLoader(
        cache,
        language=config.localized_language,
        catalog_size=config.catalog_size,
        concurrency=config.fetch_concurrency,
    )
    app.state.engine = engine
    app.state.team_store = team_store
    app.state.scorer = RecommendationScorer(engine, team_store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    if not hasattr(app.state, "cache"):
        attach_services(app)

    preload: Optional[asyncio.Task] = None
    if settings.preload_on_startup:
        logger.info("Warming entity catalog in the background")
        preload = asyncio.create_task(app.state.loader.warm_cache())
    yield
    # Shutdown: Clean up resources
    if preload is not None:
        preload.cancel()
        # Collect the cancelled preload before closing what it uses
        with contextlib.suppress(asyncio.CancelledError):
            await preload
    if isinstance(app.state.remote, PokeApiClient):
        await app.state.remote.close()
    app.state.kv_store.close()


app = FastAPI(
    title="Effectivedex",
    description="Pokédex data access, type effectiveness and team recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "effectivedex"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Effectivedex API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(pokemon_router)
app.include_router(teams_router)
app.include_router(cache_router)
