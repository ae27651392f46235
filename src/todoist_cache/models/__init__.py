"""
Todoist Cache Data Models.

This package provides the Pydantic models for the eight cached Sync API
resource kinds plus the user record. They mirror the Sync API payloads so
sync responses can be validated straight into the cache.

Models:
    - Item: Task (with Due, Deadline, Duration)
    - Project: Project, nested through parent_id
    - Section: Project section
    - Label: Personal label
    - Note: Task comment
    - ProjectNote: Project comment
    - Reminder: Task reminder
    - SavedFilter: Server-side saved filter
    - User: Account owning the cache
"""

from todoist_cache.models.base import Resource
from todoist_cache.models.item import (
    Deadline,
    Due,
    Duration,
    Item,
    to_api_priority,
    to_user_priority,
)
from todoist_cache.models.project import Project, Section
from todoist_cache.models.label import Label
from todoist_cache.models.comment import FileAttachment, Note, ProjectNote
from todoist_cache.models.reminder import Reminder
from todoist_cache.models.saved_filter import SavedFilter
from todoist_cache.models.user import User

__all__ = [
    "Resource",
    "Item",
    "Due",
    "Deadline",
    "Duration",
    "Project",
    "Section",
    "Label",
    "Note",
    "ProjectNote",
    "FileAttachment",
    "Reminder",
    "SavedFilter",
    "User",
    "to_api_priority",
    "to_user_priority",
]
