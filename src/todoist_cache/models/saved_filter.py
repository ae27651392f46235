"""
Saved filter model.
"""

from __future__ import annotations

from todoist_cache.models.base import Resource


class SavedFilter(Resource):
    """A filter saved on the server; query uses the filter language."""

    name: str
    query: str = ""
    color: str | None = None
    item_order: int = 0
    is_favorite: bool = False
