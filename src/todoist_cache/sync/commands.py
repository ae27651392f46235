"""
Write commands submitted through the Sync API.
"""

from __future__ import annotations

import uuid as uuid_lib
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SyncCommandType(str, Enum):
    """Command names understood by the Sync API."""

    ITEM_ADD = "item_add"
    ITEM_UPDATE = "item_update"
    ITEM_MOVE = "item_move"
    ITEM_DELETE = "item_delete"
    ITEM_CLOSE = "item_close"
    ITEM_COMPLETE = "item_complete"
    ITEM_UNCOMPLETE = "item_uncomplete"
    ITEM_REORDER = "item_reorder"
    PROJECT_ADD = "project_add"
    PROJECT_UPDATE = "project_update"
    PROJECT_MOVE = "project_move"
    PROJECT_DELETE = "project_delete"
    PROJECT_ARCHIVE = "project_archive"
    PROJECT_UNARCHIVE = "project_unarchive"
    SECTION_ADD = "section_add"
    SECTION_UPDATE = "section_update"
    SECTION_MOVE = "section_move"
    SECTION_DELETE = "section_delete"
    SECTION_ARCHIVE = "section_archive"
    SECTION_UNARCHIVE = "section_unarchive"
    LABEL_ADD = "label_add"
    LABEL_UPDATE = "label_update"
    LABEL_DELETE = "label_delete"
    NOTE_ADD = "note_add"
    NOTE_UPDATE = "note_update"
    NOTE_DELETE = "note_delete"
    REMINDER_ADD = "reminder_add"
    REMINDER_UPDATE = "reminder_update"
    REMINDER_DELETE = "reminder_delete"
    FILTER_ADD = "filter_add"
    FILTER_UPDATE = "filter_update"
    FILTER_DELETE = "filter_delete"


def _new_uuid() -> str:
    return str(uuid_lib.uuid4())


def _type_name(command_type: SyncCommandType | str) -> str:
    if isinstance(command_type, SyncCommandType):
        return command_type.value
    return command_type


class SyncCommand(BaseModel):
    """
    A single write command.

    Commands that create resources carry a client-generated temp_id; the
    response's temp_id_mapping translates it to the server-assigned ID.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str
    args: dict[str, Any] = Field(default_factory=dict)
    uuid: str = Field(default_factory=_new_uuid)
    temp_id: str | None = None

    @classmethod
    def new(cls, command_type: SyncCommandType | str, args: dict[str, Any]) -> SyncCommand:
        """Create a command with a fresh UUID."""
        return cls(type=_type_name(command_type), args=args)

    @classmethod
    def with_temp_id(
        cls,
        command_type: SyncCommandType | str,
        temp_id: str,
        args: dict[str, Any],
    ) -> SyncCommand:
        """Create a resource-creating command with the given temporary ID."""
        return cls(type=_type_name(command_type), args=args, temp_id=temp_id)
