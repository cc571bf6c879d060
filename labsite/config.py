"""
Central configuration loader.
Reads from environment variables (via .env) with the ``LABSITE_`` prefix.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LABSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Research Group Website API"
    APP_VERSION: str = "1.0.0"

    # Paths
    DATA_DIR: Path = Field(default=_REPO_ROOT / "data")
    DATABASE_PATH: Optional[Path] = None
    UPLOAD_DIR: Path = Field(default=_REPO_ROOT / "public" / "upload")

    # Research areas / directions / features storage
    DOCUMENT_BACKEND: Literal["json", "sqlite"] = "json"

    # Client cache freshness window
    CACHE_TTL_SECONDS: float = 5.0

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    # Server / client
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_BASE_URL: str = "http://localhost:8000"

    @property
    def database_path(self) -> Path:
        return self.DATABASE_PATH or self.DATA_DIR / "app.db"

    @property
    def background_dir(self) -> Path:
        return self.UPLOAD_DIR / "background"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_db_path() -> Path:
    return get_settings().database_path
