"""
Runtime settings for the Todoist cache.

Settings are read from environment variables:

    TODOIST_CACHE_PATH            Location of the JSON snapshot
    TODOIST_CACHE_STALE_MINUTES   Minutes before the cache counts as stale
    TODOIST_CACHE_LOG_LEVEL       Level used by configure_logging()
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from todoist_cache.constants import APP_NAME, CACHE_FILENAME, DEFAULT_STALE_MINUTES

ENV_PREFIX = "TODOIST_CACHE_"

ENV_VARS = {
    "cache_path": ENV_PREFIX + "PATH",
    "stale_minutes": ENV_PREFIX + "STALE_MINUTES",
    "log_level": ENV_PREFIX + "LOG_LEVEL",
}


def default_cache_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the XDG cache location of the snapshot file."""
    env = os.environ if env is None else env
    base = env.get("XDG_CACHE_HOME")
    cache_home = Path(base) if base else Path("~/.cache").expanduser()
    return cache_home / APP_NAME / CACHE_FILENAME


class Settings(BaseModel):
    """Cache configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cache_path: Path = Field(default_factory=default_cache_path)
    stale_minutes: int = Field(default=DEFAULT_STALE_MINUTES, ge=0)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v!r}")
        return level

    @field_validator("cache_path")
    @classmethod
    def expand_cache_path(cls, v: Path) -> Path:
        return v.expanduser()

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from TODOIST_CACHE_* variables."""
        env = os.environ if env is None else env
        values: dict[str, str] = {}
        for field, var in ENV_VARS.items():
            raw = env.get(var)
            if raw:
                values[field] = raw
        if "cache_path" not in values:
            values["cache_path"] = str(default_cache_path(env))
        return cls.model_validate(values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, read once from the environment."""
    return Settings.from_env()
