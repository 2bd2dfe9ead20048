# config.py

"""Application configuration utilities.

Values are primarily loaded from ``config.json`` and may be overridden by
environment variables. The :func:`get_settings` helper merges the two sources
and caches the result.
"""

from __future__ import annotations

import json
import os
import shlex
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    store_name: str = "ASG SHOP"
    receipt_timezone: str = "UTC"
    printer_marker: str = "POS"
    lpstat_command: list[str] = ["lpstat", "-e"]
    lp_command: list[str] = ["lp"]
    spool_dir: str | None = None
    spooler_timeout_secs: float = 10
    log_level: str = "INFO"

    @field_validator("lpstat_command", "lp_command", mode="before")
    @classmethod
    def _split_command(cls, value):
        # ``LP_COMMAND="sudo lp"`` style overrides arrive as one string
        if isinstance(value, str):
            return shlex.split(value)
        return value


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
    return Settings(**merged)
