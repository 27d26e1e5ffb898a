from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv(override=False)


DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://localhost:5174"]
THIRTY_DAYS_SECONDS = 60 * 60 * 24 * 30


class Settings(BaseModel):
    """Runtime configuration for the FastAPI server."""

    environment: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "dev"))
    sqlite_db_path: Path = Field(default_factory=lambda: Path(os.getenv("ARTICLES_DB", "artifacts/articles.db")))
    cors_origins: List[str] = Field(default_factory=lambda: os.getenv("CORS_ORIGINS") or list(DEFAULT_CORS_ORIGINS))
    session_cookie_name: str = Field(
        default_factory=lambda: os.getenv("SESSION_COOKIE_NAME", "articletree_session")
    )
    session_max_age_seconds: int = Field(
        default_factory=lambda: int(os.getenv("SESSION_MAX_AGE_SECONDS", str(THIRTY_DAYS_SECONDS)))
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in {"prod", "production"}

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> List[str]:
        if value is None:
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(value, str):
            if not value.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return list(value)

    @field_validator("session_max_age_seconds")
    @classmethod
    def _positive_age(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("SESSION_MAX_AGE_SECONDS must be positive.")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance for FastAPI dependency injection."""

    return Settings()


__all__ = ["Settings", "get_settings", "DEFAULT_CORS_ORIGINS"]
