# config.py

"""Application configuration utilities.

Values are primarily loaded from ``config.json`` and may be overridden by
environment variables. The :func:`get_settings` helper merges the two sources
and caches the result.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Select where orders are persisted.

    ``REDIS`` keeps orders in a shared Redis server and is the default for
    deployments. ``MEMORY`` keeps them inside the process, which is handy for
    local development and tests.
    """

    REDIS = "redis"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    storage_backend: StorageBackend = StorageBackend.REDIS
    redis_url: str = "redis://localhost:6379/0"
    redis_max_connections: int = 64
    redis_retries: int = 0
    key_prefix: str = "kitchen"
    num_tables: int = 4999
    processing_time_min: int = 5
    processing_time_max: int = 14
    request_timeout_secs: float = 5.0
    log_level: str = "INFO"
    error_dsn: str | None = None
    env: str = "dev"

    @model_validator(mode="after")
    def _check_ranges(self) -> "Settings":
        if self.num_tables < 1:
            raise ValueError("num_tables must be at least 1")
        if self.processing_time_min < 1:
            raise ValueError("processing_time_min must be positive")
        if self.processing_time_min > self.processing_time_max:
            raise ValueError("processing_time_min exceeds processing_time_max")
        return self


# Cached singleton to avoid repeated file reads
@lru_cache
def get_settings() -> Settings:
    """Return merged settings with environment variable precedence.

    The configuration is read from ``config.json`` located alongside this file
    and fed into :class:`Settings`. Environment variables override any values
    from the JSON file. The result is cached to prevent repeated disk reads.
    """

    config_path = Path(__file__).with_name("config.json")
    data = json.loads(config_path.read_text()) if config_path.exists() else {}
    env_override = {
        k.lower(): v
        for k, v in os.environ.items()
        if k.lower() in Settings.model_fields
    }
    merged = {**data, **env_override}
    # Environment variables override values from the JSON file.
    return Settings(**merged)
