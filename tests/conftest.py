"""
Pytest Configuration and Fixtures for Todoist Cache Tests.

This module provides fixtures, test data factories, and recording fakes
shared by the test suite.

Architecture:
    - MockSyncClient: Async fake for the SyncClient protocol
    - MemoryCacheStore: In-memory fake for the CacheStorage protocol
    - Factories: Generate records and sync responses
    - Fixtures: Provide configured managers and sample data
    - Markers: Custom pytest markers for test categorization
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone
from typing import Any, Sequence

import pytest

from todoist_cache.cache import Cache, JsonCacheStore
from todoist_cache.exceptions import CacheStoreError
from todoist_cache.manager import SyncManager
from todoist_cache.models import Due, Item, Label, Note, Project, Reminder, Section, User
from todoist_cache.sync import SyncCommand, SyncResponse


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "cache: Record store and index tests")
    config.addinivalue_line("markers", "merge: Merge engine tests")
    config.addinivalue_line("markers", "store: Persistence tests")
    config.addinivalue_line("markers", "sync: Sync orchestration tests")
    config.addinivalue_line("markers", "lookups: Name and ID resolution tests")
    config.addinivalue_line("markers", "filter: Filter language tests")
    config.addinivalue_line("markers", "config: Settings and logging tests")
    config.addinivalue_line("markers", "errors: Error handling tests")


# =============================================================================
# Time Utilities
# =============================================================================


# Fixed reference date for date-sensitive filter tests (a Wednesday).
TODAY = date(2025, 1, 15)


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


def iso_day(offset: int, today: date = TODAY) -> str:
    """ISO date string offset days from today."""
    return (today + timedelta(days=offset)).isoformat()


# =============================================================================
# ID Generators
# =============================================================================


class IDGenerator:
    """Sequential ID generator for test objects."""

    _counter: int = 0

    @classmethod
    def reset(cls) -> None:
        """Reset counter (call in fixtures)."""
        cls._counter = 0

    @classmethod
    def next_id(cls, prefix: str = "") -> str:
        """Generate next unique ID."""
        cls._counter += 1
        hex_part = f"{cls._counter:016x}"
        return f"{prefix}{hex_part}" if prefix else hex_part


# =============================================================================
# Test Data Factories
# =============================================================================


class ItemFactory:
    """Factory for creating Item test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        project_id: str = "proj-inbox",
        content: str = "Test Task",
        priority: int = 1,
        due: str | None = None,
        labels: list[str] | None = None,
        section_id: str | None = None,
        checked: bool = False,
        is_deleted: bool = False,
        **kwargs,
    ) -> Item:
        """Create an Item with sensible defaults. ``due`` is an ISO date."""
        return Item(
            id=id or IDGenerator.next_id("item"),
            project_id=project_id,
            content=content,
            priority=priority,
            due=Due(date=due) if due else None,
            labels=labels or [],
            section_id=section_id,
            checked=checked,
            is_deleted=is_deleted,
            **kwargs,
        )

    @staticmethod
    def create_due_in(days: int, today: date = TODAY, **kwargs) -> Item:
        """Create an item due ``days`` from today (negative for the past)."""
        return ItemFactory.create(due=iso_day(days, today), **kwargs)

    @staticmethod
    def tombstone(id: str, project_id: str = "proj-inbox") -> Item:
        """Create a soft-deleted item record."""
        return ItemFactory.create(id=id, project_id=project_id, is_deleted=True)


class ProjectFactory:
    """Factory for creating Project test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        name: str = "Test Project",
        parent_id: str | None = None,
        is_deleted: bool = False,
        **kwargs,
    ) -> Project:
        return Project(
            id=id or IDGenerator.next_id("proj"),
            name=name,
            parent_id=parent_id,
            is_deleted=is_deleted,
            **kwargs,
        )


class SectionFactory:
    """Factory for creating Section test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        name: str = "Test Section",
        project_id: str = "proj-inbox",
        is_deleted: bool = False,
        **kwargs,
    ) -> Section:
        return Section(
            id=id or IDGenerator.next_id("sec"),
            name=name,
            project_id=project_id,
            is_deleted=is_deleted,
            **kwargs,
        )


class LabelFactory:
    """Factory for creating Label test objects."""

    @staticmethod
    def create(
        id: str | None = None,
        name: str = "label",
        is_deleted: bool = False,
        **kwargs,
    ) -> Label:
        return Label(
            id=id or IDGenerator.next_id("label"),
            name=name,
            is_deleted=is_deleted,
            **kwargs,
        )


class ResponseFactory:
    """Factory for SyncResponse deltas."""

    @staticmethod
    def full(sync_token: str = "token-full", **kwargs) -> SyncResponse:
        """A full sync response."""
        kwargs.setdefault("full_sync_date_utc", "2025-01-15T09:00:00Z")
        return SyncResponse(sync_token=sync_token, full_sync=True, **kwargs)

    @staticmethod
    def incremental(sync_token: str = "token-incr", **kwargs) -> SyncResponse:
        """An incremental sync or command response."""
        return SyncResponse(sync_token=sync_token, full_sync=False, **kwargs)


# =============================================================================
# Fakes
# =============================================================================


class MockSyncClient:
    """
    Recording fake for the SyncClient protocol.

    Each method returns the configured response for its kind. Set
    ``should_fail[method]`` to an exception to make the next calls raise it,
    or ``fail_once[method]`` to raise only on the next call.
    """

    def __init__(self):
        self.full_response: SyncResponse = ResponseFactory.full()
        self.incremental_response: SyncResponse = ResponseFactory.incremental()
        self.submit_response: SyncResponse = ResponseFactory.incremental("token-submit")

        # Track method calls for verification
        self.call_history: list[tuple[str, tuple, dict]] = []

        # Configurable behaviors
        self.should_fail: dict[str, Exception | None] = {}
        self.fail_once: dict[str, Exception] = {}

    def _record_call(self, method: str, args: tuple, kwargs: dict) -> None:
        """Record method call for verification."""
        self.call_history.append((method, args, kwargs))

    def _check_failure(self, method: str) -> None:
        """Check if method should raise an exception."""
        if method in self.fail_once:
            raise self.fail_once.pop(method)
        if method in self.should_fail and self.should_fail[method]:
            raise self.should_fail[method]

    async def full_sync(self) -> SyncResponse:
        self._record_call("full_sync", (), {})
        self._check_failure("full_sync")
        return self.full_response

    async def incremental_sync(self, sync_token: str) -> SyncResponse:
        self._record_call("incremental_sync", (sync_token,), {})
        self._check_failure("incremental_sync")
        return self.incremental_response

    async def submit(self, commands: Sequence[SyncCommand], sync_token: str) -> SyncResponse:
        self._record_call("submit", (list(commands), sync_token), {})
        self._check_failure("submit")
        return self.submit_response

    # -------------------------------------------------------------------------
    # Verification Helpers
    # -------------------------------------------------------------------------

    def get_calls(self, method_name: str) -> list[tuple[tuple, dict]]:
        """Get all calls to a specific method."""
        return [(args, kwargs) for name, args, kwargs in self.call_history if name == method_name]

    def assert_called(self, method_name: str, times: int | None = None) -> None:
        """Assert a method was called (optionally a specific number of times)."""
        calls = self.get_calls(method_name)
        if times is not None:
            assert len(calls) == times, f"Expected {method_name} to be called {times} times, got {len(calls)}"
        else:
            assert len(calls) > 0, f"Expected {method_name} to be called at least once"

    def assert_not_called(self, method_name: str) -> None:
        """Assert a method was not called."""
        calls = self.get_calls(method_name)
        assert len(calls) == 0, f"Expected {method_name} not to be called, but was called {len(calls)} times"


class MemoryCacheStore:
    """In-memory fake for the CacheStorage protocol."""

    def __init__(self, cache: Cache | None = None):
        self.stored: Cache | None = cache
        self.saves: list[Cache] = []
        self.load_count: int = 0
        self.fail_save: bool = False
        self.save_delay: float = 0.0

    async def load(self) -> Cache | None:
        self.load_count += 1
        return self.stored

    async def save(self, cache: Cache) -> None:
        if self.save_delay:
            await asyncio.sleep(self.save_delay)
        if self.fail_save:
            raise CacheStoreError("disk full")
        self.saves.append(cache)
        self.stored = cache


# =============================================================================
# Sample Data
# =============================================================================


def sample_resources() -> dict[str, Any]:
    """
    A small account:

        Work (proj-work)
        └── Client A (proj-client)
            └── Phase 1 (proj-phase)
        Personal (proj-personal)
        Inbox (proj-inbox)
    """
    projects = [
        ProjectFactory.create(id="proj-inbox", name="Inbox", inbox_project=True),
        ProjectFactory.create(id="proj-work", name="Work"),
        ProjectFactory.create(id="proj-client", name="Client A", parent_id="proj-work"),
        ProjectFactory.create(id="proj-phase", name="Phase 1", parent_id="proj-client"),
        ProjectFactory.create(id="proj-personal", name="Personal"),
    ]
    sections = [
        SectionFactory.create(id="sec-backlog", name="Backlog", project_id="proj-work"),
        SectionFactory.create(id="sec-doing", name="Doing", project_id="proj-work"),
        SectionFactory.create(id="sec-home-backlog", name="Backlog", project_id="proj-personal"),
    ]
    labels = [
        LabelFactory.create(id="label-urgent", name="urgent"),
        LabelFactory.create(id="label-waiting", name="waiting"),
    ]
    items = [
        ItemFactory.create(id="abc123aa", content="Write report", project_id="proj-work",
                           priority=4, due=iso_day(0), labels=["urgent"], section_id="sec-doing"),
        ItemFactory.create(id="abc123bb", content="Call client", project_id="proj-client",
                           priority=3, due=iso_day(1)),
        ItemFactory.create(id="def45600", content="Buy milk", project_id="proj-personal",
                           due=iso_day(-2), labels=["Errand"]),
        ItemFactory.create(id="ghi78900", content="Someday", project_id="proj-inbox"),
        ItemFactory.create(id="jkl01200", content="Shipped", project_id="proj-phase",
                           checked=True, due=iso_day(-5)),
    ]
    notes = [Note(id="note-1", item_id="abc123aa", content="Draft attached")]
    reminders = [Reminder(id="rem-1", item_id="abc123aa", minute_offset=30)]
    user = User(id="user-1", email="ada@example.com", full_name="Ada", timezone="UTC")
    return {
        "projects": projects,
        "sections": sections,
        "labels": labels,
        "items": items,
        "notes": notes,
        "reminders": reminders,
        "user": user,
    }


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def id_generator():
    """Reset and provide ID generator."""
    IDGenerator.reset()
    return IDGenerator


@pytest.fixture
def item_factory() -> type[ItemFactory]:
    """Provide ItemFactory class."""
    return ItemFactory


@pytest.fixture
def project_factory() -> type[ProjectFactory]:
    """Provide ProjectFactory class."""
    return ProjectFactory


@pytest.fixture
def section_factory() -> type[SectionFactory]:
    """Provide SectionFactory class."""
    return SectionFactory


@pytest.fixture
def label_factory() -> type[LabelFactory]:
    """Provide LabelFactory class."""
    return LabelFactory


@pytest.fixture
def response_factory() -> type[ResponseFactory]:
    """Provide ResponseFactory class."""
    return ResponseFactory


@pytest.fixture
def today() -> date:
    """Fixed reference date."""
    return TODAY


@pytest.fixture
def full_response() -> SyncResponse:
    """Full sync response carrying the sample account."""
    return ResponseFactory.full(**sample_resources())


@pytest.fixture
def populated_cache(full_response: SyncResponse) -> Cache:
    """A cache after a full sync of the sample account."""
    from todoist_cache.cache import apply_sync_response

    return apply_sync_response(Cache(), full_response)


@pytest.fixture
def mock_client(full_response: SyncResponse) -> MockSyncClient:
    """Create a fresh mock client serving the sample account."""
    client = MockSyncClient()
    client.full_response = full_response
    return client


@pytest.fixture
def memory_store() -> MemoryCacheStore:
    """Create an empty in-memory store."""
    return MemoryCacheStore()


@pytest.fixture
def manager(mock_client: MockSyncClient, memory_store: MemoryCacheStore) -> SyncManager:
    """A manager with an empty cache."""
    return SyncManager(mock_client, memory_store)


@pytest.fixture
async def synced_manager(manager: SyncManager, mock_client: MockSyncClient) -> SyncManager:
    """A manager after one full sync; the client call history is cleared."""
    await manager.sync()
    mock_client.call_history.clear()
    return manager


@pytest.fixture
def json_store(tmp_path) -> JsonCacheStore:
    """A JSON store writing under a temporary directory."""
    return JsonCacheStore(tmp_path / "td" / "cache.json")
