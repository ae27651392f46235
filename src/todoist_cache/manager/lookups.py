"""
Name and ID resolution with a sync fallback.

Each resolve_* method looks in the cache first. On a miss it runs one
sync() and looks again; if the record is still missing it raises
NotFoundError, with a close name suggestion where one exists.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from difflib import get_close_matches
from typing import Iterable, Sequence

from todoist_cache.cache.cache import Cache
from todoist_cache.exceptions import AmbiguousItemError, NotFoundError
from todoist_cache.models import Item, Label, Project, Section

logger = logging.getLogger(__name__)

SUGGESTION_CUTOFF = 0.6


def find_similar_name(query: str, candidates: Iterable[str]) -> str | None:
    """
    Return the candidate closest to query, compared case-insensitively.

    An exact (case-insensitive) match is never suggested, since it would
    have been found by the lookup itself. Returns None when nothing is
    close enough.
    """
    query_lower = query.lower()
    by_lower: dict[str, str] = {}
    for name in candidates:
        if name and name.lower() != query_lower:
            by_lower.setdefault(name.lower(), name)

    close = get_close_matches(query_lower, list(by_lower), n=1, cutoff=SUGGESTION_CUTOFF)
    if not close:
        return None
    return by_lower[close[0]]


# =============================================================================
# Cache Lookups
# =============================================================================


def find_project_in_cache(cache: Cache, name_or_id: str) -> Project | None:
    return cache.get_project(name_or_id) or cache.find_project_by_name(name_or_id)


def find_label_in_cache(cache: Cache, name_or_id: str) -> Label | None:
    return cache.get_label(name_or_id) or cache.find_label_by_name(name_or_id)


def find_section_in_cache(
    cache: Cache,
    name_or_id: str,
    project_id: str | None = None,
) -> Section | None:
    """Match by ID regardless of project, otherwise by name within project_id."""
    return cache.get_section(name_or_id) or cache.find_section_by_name(name_or_id, project_id)


def _checked_ok(item: Item, require_checked: bool | None) -> bool:
    return require_checked is None or item.checked == require_checked


def find_items_by_prefix(
    cache: Cache,
    id_or_prefix: str,
    require_checked: bool | None = None,
) -> list[Item]:
    """
    Items matching an ID or ID prefix.

    An exact ID match is returned alone; otherwise every item whose ID
    starts with the prefix is returned, in cache order.
    """
    exact = cache.get_item(id_or_prefix)
    if exact is not None and _checked_ok(exact, require_checked):
        return [exact]
    return [
        item
        for item in cache.items
        if item.id.startswith(id_or_prefix) and _checked_ok(item, require_checked)
    ]


def _single_item(matches: Sequence[Item], id_or_prefix: str) -> Item | None:
    if len(matches) > 1:
        raise AmbiguousItemError(id_or_prefix, matches)
    return matches[0] if matches else None


# =============================================================================
# Resolver Mixin
# =============================================================================


class ResourceLookupMixin(ABC):
    """
    Async resolvers for SyncManager.

    Subclasses provide a ``cache`` property and implement ``sync()``.
    """

    cache: Cache

    @abstractmethod
    async def sync(self) -> Cache:
        """Refresh the cache from the server."""

    async def resolve_project(self, name_or_id: str) -> Project:
        """Resolve a project by ID or case-insensitive name."""
        project = find_project_in_cache(self.cache, name_or_id)
        if project is not None:
            return project

        logger.debug("Project %r not cached, syncing", name_or_id)
        await self.sync()
        project = find_project_in_cache(self.cache, name_or_id)
        if project is not None:
            return project

        suggestion = find_similar_name(name_or_id, (p.name for p in self.cache.projects))
        raise NotFoundError("Project", name_or_id, suggestion)

    async def resolve_label(self, name_or_id: str) -> Label:
        """Resolve a label by ID or case-insensitive name."""
        label = find_label_in_cache(self.cache, name_or_id)
        if label is not None:
            return label

        logger.debug("Label %r not cached, syncing", name_or_id)
        await self.sync()
        label = find_label_in_cache(self.cache, name_or_id)
        if label is not None:
            return label

        suggestion = find_similar_name(name_or_id, (lbl.name for lbl in self.cache.labels))
        raise NotFoundError("Label", name_or_id, suggestion)

    async def resolve_section(self, name_or_id: str, project_id: str | None = None) -> Section:
        """
        Resolve a section by ID or case-insensitive name.

        Name matches are limited to project_id when it is given; ID matches
        ignore it.
        """
        section = find_section_in_cache(self.cache, name_or_id, project_id)
        if section is not None:
            return section

        logger.debug("Section %r not cached, syncing", name_or_id)
        await self.sync()
        section = find_section_in_cache(self.cache, name_or_id, project_id)
        if section is not None:
            return section

        suggestion = find_similar_name(
            name_or_id,
            (
                s.name
                for s in self.cache.sections
                if project_id is None or s.project_id == project_id
            ),
        )
        raise NotFoundError("Section", name_or_id, suggestion)

    async def resolve_item(self, item_id: str) -> Item:
        """Resolve an item by its exact ID."""
        item = self.cache.get_item(item_id)
        if item is not None:
            return item

        logger.debug("Item %r not cached, syncing", item_id)
        await self.sync()
        item = self.cache.get_item(item_id)
        if item is not None:
            return item
        raise NotFoundError("Item", item_id)

    async def resolve_item_by_prefix(
        self,
        id_or_prefix: str,
        require_checked: bool | None = None,
    ) -> Item:
        """
        Resolve an item by exact ID or unique ID prefix.

        Args:
            id_or_prefix: Full ID or leading part of one
            require_checked: If set, only items with this completion state match

        Raises:
            AmbiguousItemError: If several items share the prefix
            NotFoundError: If no item matches, even after a sync
        """
        item = _single_item(
            find_items_by_prefix(self.cache, id_or_prefix, require_checked), id_or_prefix
        )
        if item is not None:
            return item

        logger.debug("No item matching %r cached, syncing", id_or_prefix)
        await self.sync()
        item = _single_item(
            find_items_by_prefix(self.cache, id_or_prefix, require_checked), id_or_prefix
        )
        if item is not None:
            return item
        raise NotFoundError("Item", id_or_prefix)
