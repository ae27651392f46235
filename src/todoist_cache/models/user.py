"""
User model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """The account that owns the cache."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    full_name: str | None = None
    timezone: str | None = None
    inbox_project_id: str | None = None
    start_page: str | None = None
    start_day: int | None = None
    date_format: int | None = None
    time_format: int | None = None
    is_premium: bool = False
