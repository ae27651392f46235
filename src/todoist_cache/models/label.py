"""
Label model.
"""

from __future__ import annotations

from todoist_cache.models.base import Resource


class Label(Resource):
    """A personal label. Items reference labels by name."""

    name: str
    color: str | None = None
    item_order: int = 0
    is_favorite: bool = False
