"""
Configuration helpers for the cadastro app.

Routers/services receive a Settings object instead of reading os.environ
directly, so tests can build one pointing at a temporary database.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_DATABASE_URL = "sqlite:///usuarios.db"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str = "dev"
    database_url: str = DEFAULT_DATABASE_URL


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    url = (os.getenv("DATABASE_URL") or "").strip()
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=url or DEFAULT_DATABASE_URL,
    )
