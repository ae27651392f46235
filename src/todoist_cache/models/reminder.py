"""
Reminder model.
"""

from __future__ import annotations

from todoist_cache.models.base import Resource
from todoist_cache.models.item import Due


class Reminder(Resource):
    """A reminder attached to a task, either relative or absolute."""

    item_id: str
    type: str = "relative"
    due: Due | None = None
    minute_offset: int | None = None
