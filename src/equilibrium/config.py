"""Centralised application settings loaded from environment / .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_DEFAULT_DB_URL = f"sqlite+aiosqlite:///{_PROJECT_ROOT / 'data' / 'equilibrium.db'}"


class Settings(BaseSettings):
    """All runtime configuration for the Equilibrium dashboard.

    Values are read from environment variables first, then from a *.env* file
    located at the project root.  Every variable lives in the flat
    ``EQUILIBRIUM_`` namespace (stripped automatically by *pydantic-settings*).
    """

    model_config = SettingsConfigDict(
        env_prefix="EQUILIBRIUM_",
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ───────────────────────────────────────────────
    storage_backend: Literal["sqlite", "memory"] = "sqlite"
    database_url: str = _DEFAULT_DB_URL

    # ── API server ────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_secret_key: str = "change-me-to-a-random-secret"

    # ── CORS ──────────────────────────────────────────────────
    cors_origins: str = "*"  # comma-separated origins, or "*" for all

    # ── Accounts ──────────────────────────────────────────────
    password_min_length: int = 6
    password_hash_iterations: int = 240_000

    # ── Shape rendering ───────────────────────────────────────
    shape_point_count: int = 8
    shape_base_radius: float = 80.0

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached :class:`Settings` singleton."""
    return Settings()
