# config.py

"""Application configuration utilities.

Values are primarily loaded from ``config.json`` located next to this module
and may be overridden by environment variables. The :func:`get_settings`
helper merges the two sources and caches the result.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./bones.db"
    db_echo: bool = False
    slow_query_ms: int = 200
    kitchen_poll_initial_delay_secs: float = 5.0
    kitchen_poll_period_secs: float = 30.0
    log_level: str = "INFO"
    log_json: bool = True


# Cached singleton to avoid repeated file reads
@lru_cache
def get_settings() -> Settings:
    """Return merged settings with environment variable precedence.

    The configuration is read from ``config.json`` and fed into
    :class:`Settings`. Environment variables override any values from the
    JSON file. The result is cached to prevent repeated disk reads.
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
