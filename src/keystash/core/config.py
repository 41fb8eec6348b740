# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="KEYSTASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Cache
    cache_backend: str = "file"  # "memory", "file", "json" or "redis"
    cache_dir: Path = Path(".keystash")
    default_ttl: int | None = None  # seconds; None means entries never expire
    redis_url: str = "redis://localhost:6379/0"

    @field_validator("cache_backend", mode="before")
    @classmethod
    def _normalise_cache_backend(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"


def get_settings() -> Settings:
    return Settings()
