"""
Sync orchestration.

SyncManager owns the in-memory Cache and coordinates it with a sync client
and a persistence backend. Every operation follows the same commit order:
the new cache is computed, persisted, and only then swapped in, so a failed
request or a failed save leaves the in-memory cache exactly as it was. A
caller cancelled mid-save waits for the save to finish, so the snapshot on
disk is never ahead of the in-memory cache.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Sequence, TypeVar

from todoist_cache.cache.cache import Cache
from todoist_cache.cache.merge import apply_mutation_response, apply_sync_response
from todoist_cache.cache.store import JsonCacheStore
from todoist_cache.constants import DEFAULT_STALE_MINUTES, FULL_SYNC_TOKEN
from todoist_cache.exceptions import SyncTokenInvalidError
from todoist_cache.manager.lookups import ResourceLookupMixin
from todoist_cache.protocols import CacheStorage, SyncClient
from todoist_cache.settings import Settings, get_settings
from todoist_cache.sync.commands import SyncCommand
from todoist_cache.sync.response import SyncResponse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="SyncManager")


class SyncManager(ResourceLookupMixin):
    """
    Keeps a local cache in step with the server.

    Usage:
        manager = await SyncManager.open(client, JsonCacheStore())
        if manager.needs_sync():
            await manager.sync()
        project = await manager.resolve_project("Work")

        response = await manager.execute_commands([
            SyncCommand.with_temp_id("item_add", "tmp-1", {"content": "Buy milk"}),
        ])
        real_id = response.real_id("tmp-1")

    A manager is not safe for concurrent use from several tasks; callers
    sharing one should guard it with an asyncio.Lock.
    """

    def __init__(
        self,
        client: SyncClient,
        store: CacheStorage,
        *,
        cache: Cache | None = None,
        stale_minutes: int = DEFAULT_STALE_MINUTES,
    ) -> None:
        if stale_minutes < 0:
            raise ValueError("stale_minutes must be >= 0")
        self._client = client
        self._store = store
        self._cache = cache if cache is not None else Cache()
        self._stale_minutes = stale_minutes

    @classmethod
    async def open(
        cls: type[T],
        client: SyncClient,
        store: CacheStorage,
        *,
        stale_minutes: int = DEFAULT_STALE_MINUTES,
    ) -> T:
        """Create a manager from the persisted cache, or an empty one."""
        cache = await store.load()
        if cache is None:
            logger.info("No persisted cache found, starting empty")
            cache = Cache()
        return cls(client, store, cache=cache, stale_minutes=stale_minutes)

    @classmethod
    async def from_settings(
        cls: type[T],
        client: SyncClient,
        settings: Settings | None = None,
    ) -> T:
        """Create a manager backed by a JsonCacheStore configured from settings."""
        settings = settings or get_settings()
        store = JsonCacheStore(settings.cache_path)
        return await cls.open(client, store, stale_minutes=settings.stale_minutes)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def cache(self) -> Cache:
        """The current in-memory cache."""
        return self._cache

    @property
    def client(self) -> SyncClient:
        return self._client

    @property
    def store(self) -> CacheStorage:
        return self._store

    @property
    def stale_minutes(self) -> int:
        return self._stale_minutes

    # =========================================================================
    # Staleness
    # =========================================================================

    def is_stale(self, now: datetime | None = None) -> bool:
        """True if never synced, or last synced more than stale_minutes ago."""
        last_sync = self._cache.last_sync
        if last_sync is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now - last_sync > timedelta(minutes=self._stale_minutes)

    def needs_sync(self, now: datetime | None = None) -> bool:
        """True if a full sync is required or the cache is stale."""
        return self._cache.needs_full_sync() or self.is_stale(now)

    # =========================================================================
    # Sync Operations
    # =========================================================================

    async def sync(self) -> Cache:
        """
        Bring the cache up to date.

        Runs a full sync if the cache was never synced, otherwise an
        incremental one. If the server rejects the stored token, the token
        is reset and one full sync is run instead.

        Returns:
            The updated cache.
        """
        if self._cache.needs_full_sync():
            logger.debug("Cache has no sync token, running full sync")
            return await self.full_sync()

        logger.debug("Running incremental sync")
        try:
            response = await self._client.incremental_sync(self._cache.sync_token)
        except SyncTokenInvalidError:
            logger.warning("Sync token rejected by server, falling back to full sync")
            self._cache.sync_token = FULL_SYNC_TOKEN
            return await self.full_sync()

        return await self._commit(apply_sync_response(self._cache, response))

    async def full_sync(self) -> Cache:
        """Fetch everything and replace the cache, regardless of staleness."""
        response = await self._client.full_sync()
        if not response.full_sync:
            response = response.model_copy(update={"full_sync": True})
        cache = await self._commit(apply_sync_response(self._cache, response))
        logger.info(
            "Full sync complete: %d items, %d projects", len(cache.items), len(cache.projects)
        )
        return cache

    async def execute_commands(self, commands: Sequence[SyncCommand]) -> SyncResponse:
        """
        Submit write commands and merge the resulting delta.

        Commands are sent with the current sync token, so the response only
        carries the records they touched.

        Returns:
            The raw response, for temp_id_mapping and sync_status.
        """
        logger.debug("Submitting %d command(s)", len(commands))
        response = await self._client.submit(list(commands), self._cache.sync_token)
        await self._commit(apply_mutation_response(self._cache, response))

        errors = response.errors()
        if errors:
            logger.warning("%d of %d command(s) failed", len(errors), len(commands))
        return response

    execute = execute_commands

    async def reload(self) -> Cache:
        """Discard in-memory state and reload from the store."""
        cache = await self._store.load()
        self._cache = cache if cache is not None else Cache()
        logger.debug("Reloaded cache from store")
        return self._cache

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _commit(self, cache: Cache) -> Cache:
        save = asyncio.ensure_future(self._store.save(cache))
        try:
            await asyncio.shield(save)
        except asyncio.CancelledError:
            # The save outlives the cancelled caller; the snapshot must not
            # end up ahead of the in-memory cache.
            await asyncio.wait({save})
            if not save.cancelled() and save.exception() is None:
                self._cache = cache
                logger.debug("Sync cancelled after save, keeping the saved cache")
            raise
        self._cache = cache
        return cache
