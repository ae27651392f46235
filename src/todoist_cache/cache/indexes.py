"""
Derived lookup indexes over the cache collections.

Indexes map IDs and lowercased names to positions in the cache lists. They
are a pure function of the collections: they are rebuilt wholesale after
every merge and after loading, and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from todoist_cache.models import Resource

if TYPE_CHECKING:
    from todoist_cache.cache.cache import Cache


def _positions_by_id(records: Sequence[Resource]) -> dict[str, int]:
    return {record.id: position for position, record in enumerate(records)}


@dataclass
class CacheIndexes:
    """
    Position lookups for one snapshot of the cache.

    Project and label names are assumed unique (first occurrence wins).
    Section names repeat across projects, so sections_by_name holds every
    (project_id, position) pair for a name.
    """

    items_by_id: dict[str, int] = field(default_factory=dict)
    projects_by_id: dict[str, int] = field(default_factory=dict)
    labels_by_id: dict[str, int] = field(default_factory=dict)
    sections_by_id: dict[str, int] = field(default_factory=dict)
    notes_by_id: dict[str, int] = field(default_factory=dict)
    project_notes_by_id: dict[str, int] = field(default_factory=dict)
    reminders_by_id: dict[str, int] = field(default_factory=dict)
    filters_by_id: dict[str, int] = field(default_factory=dict)

    projects_by_name: dict[str, int] = field(default_factory=dict)
    labels_by_name: dict[str, int] = field(default_factory=dict)
    sections_by_name: dict[str, list[tuple[str, int]]] = field(default_factory=dict)

    @classmethod
    def build(cls, cache: Cache) -> CacheIndexes:
        """Build all indexes from the current collections."""
        indexes = cls(
            items_by_id=_positions_by_id(cache.items),
            projects_by_id=_positions_by_id(cache.projects),
            labels_by_id=_positions_by_id(cache.labels),
            sections_by_id=_positions_by_id(cache.sections),
            notes_by_id=_positions_by_id(cache.notes),
            project_notes_by_id=_positions_by_id(cache.project_notes),
            reminders_by_id=_positions_by_id(cache.reminders),
            filters_by_id=_positions_by_id(cache.filters),
        )

        for position, project in enumerate(cache.projects):
            indexes.projects_by_name.setdefault(project.name.lower(), position)

        for position, label in enumerate(cache.labels):
            indexes.labels_by_name.setdefault(label.name.lower(), position)

        for position, section in enumerate(cache.sections):
            indexes.sections_by_name.setdefault(section.name.lower(), []).append(
                (section.project_id, position)
            )

        return indexes
