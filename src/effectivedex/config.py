"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:8081,http://127.0.0.1:8081"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Remote data source (PokeAPI)
    api_base_url: str = "https://pokeapi.co/api/v2"
    http_timeout: float = 10.0

    # Cache
    cache_ttl_seconds: float = 60 * 60 * 24
    catalog_size: int = 500  # Entities assembled into the searchable catalog
    fetch_concurrency: int = 20
    preload_on_startup: bool = True

    # Persistent key/value store (DuckDB file)
    database_path: str = "data/effectivedex.duckdb"

    # Language used for localized entity names
    localized_language: str = "fr"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
