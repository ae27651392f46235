"""
Record Store and Index Tests.

This module tests the Cache model and its lookup indexes:
- Sync state helpers
- ID lookups for every collection
- Case-insensitive name lookups
- Lazy and explicit index rebuilding
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from todoist_cache.cache import Cache, CacheIndexes
from todoist_cache.constants import FULL_SYNC_TOKEN

if TYPE_CHECKING:
    from tests.conftest import ItemFactory, LabelFactory, ProjectFactory, SectionFactory


pytestmark = [pytest.mark.cache, pytest.mark.unit]


# =============================================================================
# Sync State
# =============================================================================


class TestSyncState:
    """Tests for the sentinel token helpers."""

    def test_new_cache_needs_full_sync(self):
        """Test a fresh cache carries the sentinel token."""
        cache = Cache()

        assert cache.sync_token == FULL_SYNC_TOKEN
        assert cache.is_empty()
        assert cache.needs_full_sync()
        assert cache.last_sync is None

    def test_synced_cache(self, populated_cache: Cache):
        """Test a synced cache no longer needs a full sync."""
        assert not populated_cache.is_empty()
        assert not populated_cache.needs_full_sync()
        assert populated_cache.last_sync is not None


# =============================================================================
# ID Lookups
# =============================================================================


class TestIdLookups:
    """Tests for lookups by ID."""

    def test_get_each_collection(self, populated_cache: Cache):
        """Test every accessor returns the record with that ID."""
        assert populated_cache.get_item("abc123bb").content == "Call client"
        assert populated_cache.get_project("proj-work").name == "Work"
        assert populated_cache.get_section("sec-doing").name == "Doing"
        assert populated_cache.get_label("label-urgent").name == "urgent"
        assert populated_cache.get_note("note-1").item_id == "abc123aa"
        assert populated_cache.get_reminder("rem-1").minute_offset == 30

    def test_missing_ids(self, populated_cache: Cache):
        """Test unknown IDs return None."""
        assert populated_cache.get_item("nope") is None
        assert populated_cache.get_project("nope") is None
        assert populated_cache.get_project_note("nope") is None
        assert populated_cache.get_filter("nope") is None

    def test_ids_are_case_sensitive(self, populated_cache: Cache):
        """Test ID lookups do not fold case."""
        assert populated_cache.get_item("ABC123BB") is None


# =============================================================================
# Name Lookups
# =============================================================================


class TestNameLookups:
    """Tests for case-insensitive name lookups."""

    @pytest.mark.parametrize("name", ["Work", "work", "WORK"])
    def test_find_project_by_name(self, populated_cache: Cache, name: str):
        """Test project names match regardless of case."""
        project = populated_cache.find_project_by_name(name)

        assert project is not None
        assert project.id == "proj-work"

    def test_find_label_by_name(self, populated_cache: Cache):
        """Test label names match regardless of case."""
        assert populated_cache.find_label_by_name("URGENT").id == "label-urgent"
        assert populated_cache.find_label_by_name("missing") is None

    def test_duplicate_project_names_first_wins(self, project_factory: type[ProjectFactory]):
        """Test the first project with a name is returned."""
        cache = Cache(
            projects=[
                project_factory.create(id="p1", name="Dup"),
                project_factory.create(id="p2", name="dup"),
            ]
        )

        assert cache.find_project_by_name("DUP").id == "p1"

    def test_find_sections_by_name_across_projects(self, populated_cache: Cache):
        """Test every section sharing a name is returned."""
        sections = populated_cache.find_sections_by_name("backlog")

        assert [s.id for s in sections] == ["sec-backlog", "sec-home-backlog"]

    def test_find_section_by_name_scoped(self, populated_cache: Cache):
        """Test a project scope selects the right same-named section."""
        assert populated_cache.find_section_by_name("Backlog").id == "sec-backlog"
        assert (
            populated_cache.find_section_by_name("Backlog", "proj-personal").id
            == "sec-home-backlog"
        )
        assert populated_cache.find_section_by_name("Doing", "proj-personal") is None


# =============================================================================
# Index Maintenance
# =============================================================================


class TestIndexes:
    """Tests for building and rebuilding indexes."""

    def test_indexes_built_lazily(self, item_factory: type[ItemFactory]):
        """Test a directly constructed cache can be queried."""
        cache = Cache(items=[item_factory.create(id="a"), item_factory.create(id="b")])

        assert cache.get_item("b").id == "b"

    def test_rebuild_after_direct_mutation(self, item_factory: type[ItemFactory]):
        """Test appended records become visible after rebuild_indexes()."""
        cache = Cache(items=[item_factory.create(id="a")])
        cache.rebuild_indexes()

        cache.items.append(item_factory.create(id="b"))
        assert cache.get_item("b") is None

        cache.rebuild_indexes()
        assert cache.get_item("b").id == "b"

    def test_build_positions(
        self,
        item_factory: type[ItemFactory],
        label_factory: type[LabelFactory],
        section_factory: type[SectionFactory],
    ):
        """Test index contents map to list positions."""
        cache = Cache(
            items=[item_factory.create(id="x"), item_factory.create(id="y")],
            labels=[label_factory.create(id="l1", name="Home")],
            sections=[
                section_factory.create(id="s1", name="Todo", project_id="p1"),
                section_factory.create(id="s2", name="todo", project_id="p2"),
            ],
        )

        indexes = CacheIndexes.build(cache)

        assert indexes.items_by_id == {"x": 0, "y": 1}
        assert indexes.labels_by_name == {"home": 0}
        assert indexes.sections_by_name == {"todo": [("p1", 0), ("p2", 1)]}
