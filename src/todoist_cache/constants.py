"""
Constants shared across the Todoist cache.
"""

from __future__ import annotations

from enum import Enum

# Sync token value meaning "never synced, request everything".
FULL_SYNC_TOKEN = "*"

DEFAULT_STALE_MINUTES = 5

APP_NAME = "td"
CACHE_FILENAME = "cache.json"


class ResourceType(str, Enum):
    """Cached collections, named after their Sync API resource keys."""

    ITEMS = "items"
    PROJECTS = "projects"
    LABELS = "labels"
    SECTIONS = "sections"
    NOTES = "notes"
    PROJECT_NOTES = "project_notes"
    REMINDERS = "reminders"
    FILTERS = "filters"


RESOURCE_TYPES: tuple[str, ...] = tuple(r.value for r in ResourceType)


class Priority(int, Enum):
    """
    Internal (API) task priority.

    The API stores priority inverted: 4 is the most urgent, which users
    know as "p1".
    """

    P4 = 1
    P3 = 2
    P2 = 3
    P1 = 4

    @property
    def user_level(self) -> int:
        """The level users see, 1 (p1) being the most urgent."""
        return 5 - self.value

    @classmethod
    def from_user_level(cls, level: int) -> Priority:
        return cls(5 - level)
