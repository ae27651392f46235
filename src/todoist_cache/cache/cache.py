"""
The record store.

Cache mirrors the Sync API response layout: one list per resource kind plus
sync metadata. Lists keep a stable order within a session; IDs are unique
within each list and soft-deleted records are never kept.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from todoist_cache.cache.indexes import CacheIndexes
from todoist_cache.constants import FULL_SYNC_TOKEN
from todoist_cache.models import (
    Item,
    Label,
    Note,
    Project,
    ProjectNote,
    Reminder,
    Resource,
    SavedFilter,
    Section,
    User,
)

R = TypeVar("R", bound=Resource)


def _at(records: Sequence[R], position: int | None) -> R | None:
    if position is None:
        return None
    return records[position]


class Cache(BaseModel):
    """
    Local copy of the server state.

    A fresh cache has the sentinel sync token "*", meaning a full sync is
    required. Collections should only change through the merge functions
    in todoist_cache.cache.merge; after mutating a list directly, call
    rebuild_indexes() before using any lookup.
    """

    model_config = ConfigDict(validate_assignment=False, extra="ignore")

    sync_token: str = FULL_SYNC_TOKEN
    full_sync_date_utc: datetime | None = None
    last_sync: datetime | None = None

    items: list[Item] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    labels: list[Label] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)
    project_notes: list[ProjectNote] = Field(default_factory=list)
    reminders: list[Reminder] = Field(default_factory=list)
    filters: list[SavedFilter] = Field(default_factory=list)
    user: User | None = None

    _indexes: CacheIndexes | None = PrivateAttr(default=None)

    # =========================================================================
    # Sync State
    # =========================================================================

    def is_empty(self) -> bool:
        """True if the cache has never been synced."""
        return self.sync_token == FULL_SYNC_TOKEN

    def needs_full_sync(self) -> bool:
        """True if the next sync must request everything."""
        return self.sync_token == FULL_SYNC_TOKEN

    # =========================================================================
    # Indexes
    # =========================================================================

    def rebuild_indexes(self) -> None:
        """Recompute all lookup indexes from the collections."""
        self._indexes = CacheIndexes.build(self)

    @property
    def indexes(self) -> CacheIndexes:
        """Lookup indexes, built on first use if missing."""
        if self._indexes is None:
            self.rebuild_indexes()
        return self._indexes  # type: ignore[return-value]

    # =========================================================================
    # Lookups by ID
    # =========================================================================

    def get_item(self, item_id: str) -> Item | None:
        return _at(self.items, self.indexes.items_by_id.get(item_id))

    def get_project(self, project_id: str) -> Project | None:
        return _at(self.projects, self.indexes.projects_by_id.get(project_id))

    def get_label(self, label_id: str) -> Label | None:
        return _at(self.labels, self.indexes.labels_by_id.get(label_id))

    def get_section(self, section_id: str) -> Section | None:
        return _at(self.sections, self.indexes.sections_by_id.get(section_id))

    def get_note(self, note_id: str) -> Note | None:
        return _at(self.notes, self.indexes.notes_by_id.get(note_id))

    def get_project_note(self, note_id: str) -> ProjectNote | None:
        return _at(self.project_notes, self.indexes.project_notes_by_id.get(note_id))

    def get_reminder(self, reminder_id: str) -> Reminder | None:
        return _at(self.reminders, self.indexes.reminders_by_id.get(reminder_id))

    def get_filter(self, filter_id: str) -> SavedFilter | None:
        return _at(self.filters, self.indexes.filters_by_id.get(filter_id))

    # =========================================================================
    # Lookups by Name
    # =========================================================================

    def find_project_by_name(self, name: str) -> Project | None:
        """Find a project by case-insensitive name."""
        return _at(self.projects, self.indexes.projects_by_name.get(name.lower()))

    def find_label_by_name(self, name: str) -> Label | None:
        """Find a label by case-insensitive name."""
        return _at(self.labels, self.indexes.labels_by_name.get(name.lower()))

    def find_sections_by_name(self, name: str) -> list[Section]:
        """All sections with this case-insensitive name, across projects."""
        entries = self.indexes.sections_by_name.get(name.lower(), [])
        return [self.sections[position] for _, position in entries]

    def find_section_by_name(self, name: str, project_id: str | None = None) -> Section | None:
        """
        Find a section by case-insensitive name.

        With project_id, only sections of that project match. Without it,
        the first section with the name is returned.
        """
        for owner_id, position in self.indexes.sections_by_name.get(name.lower(), []):
            if project_id is None or owner_id == project_id:
                return self.sections[position]
        return None
