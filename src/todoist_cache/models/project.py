"""
Project and section models.
"""

from __future__ import annotations

from todoist_cache.models.base import Resource


class Project(Resource):
    """A project. Projects nest through parent_id."""

    name: str
    color: str | None = None
    parent_id: str | None = None
    child_order: int = 0
    is_collapsed: bool = False
    shared: bool = False
    can_assign_tasks: bool = False
    is_archived: bool = False
    is_favorite: bool = False
    view_style: str | None = None
    inbox_project: bool = False
    folder_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class Section(Resource):
    """A section inside a project. Section names are only unique per project."""

    name: str
    project_id: str
    section_order: int = 0
    is_collapsed: bool = False
    is_archived: bool = False
    archived_at: str | None = None
    added_at: str | None = None
    updated_at: str | None = None
