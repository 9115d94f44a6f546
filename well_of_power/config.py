"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - phase_band_starts is validated into PhaseBands at startup, not per request

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults run out-of-the-box: SQLite file database, bundled sample catalog
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from well_of_power.core.domain_types import DEFAULT_SAVE_SLOT


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./well_of_power.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # Save slot
    storage_backend: Literal["database", "file", "memory"] = "database"
    save_dir: str = "./saves"
    save_slot_name: str = DEFAULT_SAVE_SLOT

    # Content
    catalog_path: str = ""  # empty = bundled sample catalog
    phase_band_starts: dict[str, int] = {
        "intern": 0,
        "junior": 2,
        "supervisor": 4,
        "manager": 6,
        "magnate": 8,
    }

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
