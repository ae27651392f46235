"""
Comment models.

Task comments are "notes" in the Sync API, project comments are
"project_notes".
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from todoist_cache.models.base import Resource


class FileAttachment(BaseModel):
    """File attached to a comment."""

    model_config = ConfigDict(extra="allow")

    file_name: str | None = None
    file_type: str | None = None
    file_url: str | None = None
    resource_type: str | None = None


class Note(Resource):
    """A comment on a task."""

    item_id: str
    content: str = ""
    posted_at: str | None = None
    posted_uid: str | None = None
    file_attachment: FileAttachment | None = None


class ProjectNote(Resource):
    """A comment on a project."""

    project_id: str
    content: str = ""
    posted_at: str | None = None
    posted_uid: str | None = None
    file_attachment: FileAttachment | None = None
