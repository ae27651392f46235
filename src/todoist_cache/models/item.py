"""
Item (task) models.

The Sync API calls tasks "items". Priority is stored inverted: the API
value 4 is what users see as p1.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from todoist_cache.constants import Priority
from todoist_cache.models.base import Resource


class Due(BaseModel):
    """Due date of an item."""

    model_config = ConfigDict(extra="ignore")

    date: str
    datetime: str | None = None
    string: str | None = None
    timezone: str | None = None
    is_recurring: bool = False
    lang: str | None = None

    def as_date(self) -> date | None:
        """
        Parse the calendar date part of the due date.

        Timed due dates look like "2025-01-15T10:00:00"; only the date part
        is used. Returns None when the value cannot be parsed.
        """
        try:
            return date.fromisoformat(self.date[:10])
        except ValueError:
            return None


class Deadline(BaseModel):
    """Deadline of an item."""

    model_config = ConfigDict(extra="ignore")

    date: str
    lang: str | None = None


class Duration(BaseModel):
    """Estimated duration of an item."""

    model_config = ConfigDict(extra="ignore")

    amount: int
    unit: str = "minute"


class Item(Resource):
    """A task."""

    project_id: str
    content: str = ""
    description: str = ""
    priority: int = Field(default=1, ge=1, le=4)
    due: Due | None = None
    deadline: Deadline | None = None
    duration: Duration | None = None
    parent_id: str | None = None
    section_id: str | None = None
    child_order: int = 0
    day_order: int = 0
    is_collapsed: bool = False
    labels: list[str] = Field(default_factory=list)
    user_id: str | None = None
    added_by_uid: str | None = None
    assigned_by_uid: str | None = None
    responsible_uid: str | None = None
    checked: bool = False
    added_at: str | None = None
    updated_at: str | None = None
    completed_at: str | None = None

    @property
    def due_date(self) -> date | None:
        """Calendar due date, or None if absent or unparsable."""
        return self.due.as_date() if self.due else None

    @property
    def user_priority(self) -> int:
        """Priority as shown to users (1 = most urgent)."""
        return to_user_priority(self.priority)


def to_user_priority(api_priority: int) -> int:
    """Convert an API priority (4 = highest) to the user-facing level."""
    if not 1 <= api_priority <= 4:
        raise ValueError(f"priority must be between 1 and 4, got {api_priority}")
    return Priority(api_priority).user_level


def to_api_priority(user_priority: int) -> int:
    """Convert a user-facing priority level (1 = highest) to the API value."""
    if not 1 <= user_priority <= 4:
        raise ValueError(f"priority must be between 1 and 4, got {user_priority}")
    return Priority.from_user_level(user_priority).value
