"""Protocols for the collaborators a SyncManager depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from todoist_cache.cache.cache import Cache
    from todoist_cache.sync.commands import SyncCommand
    from todoist_cache.sync.response import SyncResponse


@runtime_checkable
class SyncClient(Protocol):
    """
    Protocol for Sync API clients.

    Implementations raise SyncTokenInvalidError when the server rejects
    the token passed to incremental_sync.
    """

    async def full_sync(self) -> SyncResponse:
        """Fetch every resource."""
        ...

    async def incremental_sync(self, sync_token: str) -> SyncResponse:
        """Fetch changes since sync_token."""
        ...

    async def submit(self, commands: Sequence[SyncCommand], sync_token: str) -> SyncResponse:
        """Submit write commands and return the resulting delta."""
        ...


@runtime_checkable
class CacheStorage(Protocol):
    """Protocol for cache persistence backends."""

    async def load(self) -> Cache | None:
        """Return the persisted cache, or None if nothing was saved yet."""
        ...

    async def save(self, cache: Cache) -> None:
        """Persist the cache."""
        ...
