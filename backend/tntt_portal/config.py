"""
Application configuration using Pydantic Settings.
All config is loaded from environment variables / .env file.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "tntt-portal-backend"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False  # FastAPI debug tracebacks
    CORS_ORIGINS: str = "http://localhost:3000"  # comma-separated
    LOG_LEVEL: str = "INFO"

    # ── Supabase ─────────────────────────────────────────
    SUPABASE_URL: str
    SUPABASE_KEY: str  # anon/public key
    SUPABASE_SERVICE_KEY: str = ""  # service_role key (for admin ops)

    # ── Store scanning ───────────────────────────────────
    STORE_PAGE_SIZE: int = 1000  # PostgREST max-rows per request

    # ── School year ──────────────────────────────────────
    DEFAULT_TOTAL_WEEKS: int = 37  # Used when no school year is marked current

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (singleton)."""
    return Settings()
