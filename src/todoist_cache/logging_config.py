"""Logging setup for applications embedding the cache."""

from __future__ import annotations

import logging

from todoist_cache.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging, defaulting to the level from settings."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format=LOG_FORMAT,
        force=True,
    )
