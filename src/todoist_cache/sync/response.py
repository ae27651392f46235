"""
Sync API response model.

A SyncResponse is the delta the merge engine applies to the cache. It is
produced by a sync client for full syncs, incremental syncs and command
submissions alike.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from todoist_cache.models import (
    Item,
    Label,
    Note,
    Project,
    ProjectNote,
    Reminder,
    SavedFilter,
    Section,
    User,
)


class CommandError(BaseModel):
    """Failure reported for one submitted command."""

    model_config = ConfigDict(extra="allow")

    error_code: int | None = None
    error: str = ""


CommandStatus = Union[str, CommandError]


class SyncResponse(BaseModel):
    """Changes reported by the server, plus command results for submissions."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sync_token: str
    full_sync: bool = False
    full_sync_date_utc: str | None = None

    items: list[Item] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    project_notes: list[ProjectNote] = Field(default_factory=list)
    reminders: list[Reminder] = Field(default_factory=list)
    filters: list[SavedFilter] = Field(default_factory=list)
    user: User | None = None

    temp_id_mapping: dict[str, str] = Field(default_factory=dict)
    sync_status: dict[str, CommandStatus] = Field(default_factory=dict)

    def is_command_ok(self, command_uuid: str) -> bool:
        """True if the command with this UUID was reported as successful."""
        return self.sync_status.get(command_uuid) == "ok"

    def errors(self) -> dict[str, CommandError]:
        """Failed commands keyed by UUID."""
        return {
            key: status
            for key, status in self.sync_status.items()
            if isinstance(status, CommandError)
        }

    def real_id(self, temp_id: str) -> str | None:
        """Server-assigned ID for a temporary ID, if the server reported one."""
        return self.temp_id_mapping.get(temp_id)
