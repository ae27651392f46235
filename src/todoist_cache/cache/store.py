"""
JSON file persistence for the cache.

The snapshot is the Cache model serialized as pretty-printed JSON. Indexes
are never written; they are rebuilt on load.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from todoist_cache.cache.cache import Cache
from todoist_cache.exceptions import CacheStoreError
from todoist_cache.settings import default_cache_path

logger = logging.getLogger(__name__)


class JsonCacheStore:
    """
    Stores the cache in a single JSON file.

    Blocking file operations run in a worker thread so the event loop is
    never blocked.

    Args:
        path: Snapshot location. Defaults to $XDG_CACHE_HOME/td/cache.json
              (or ~/.cache/td/cache.json).
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path).expanduser() if path is not None else default_cache_path()

    @property
    def path(self) -> Path:
        """Location of the snapshot file."""
        return self._path

    def __repr__(self) -> str:
        return f"JsonCacheStore(path={str(self._path)!r})"

    # =========================================================================
    # Public API
    # =========================================================================

    def exists(self) -> bool:
        """True if a snapshot file is present."""
        return self._path.is_file()

    async def load(self) -> Cache | None:
        """
        Load the snapshot.

        Returns:
            The cache with indexes rebuilt, or None if no snapshot exists.

        Raises:
            CacheStoreError: If the file cannot be read or decoded.
        """
        return await asyncio.to_thread(self._load_sync)

    async def load_or_default(self) -> Cache:
        """Load the snapshot, or return an empty cache if there is none."""
        cache = await self.load()
        if cache is None:
            logger.debug("No cache snapshot at %s, starting empty", self._path)
            return Cache()
        return cache

    async def save(self, cache: Cache) -> None:
        """
        Write the snapshot, creating parent directories as needed.

        Raises:
            CacheStoreError: If the file cannot be written.
        """
        await asyncio.to_thread(self._save_sync, cache)

    async def delete(self) -> None:
        """Remove the snapshot. A missing file is not an error."""
        await asyncio.to_thread(self._delete_sync)

    # =========================================================================
    # Blocking Helpers
    # =========================================================================

    def _load_sync(self) -> Cache | None:
        if not self._path.exists():
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheStoreError(
                f"Failed to read cache file: {e}", path=self._path
            ) from e

        try:
            cache = Cache.model_validate_json(raw)
        except ValidationError as e:
            raise CacheStoreError(
                "Failed to decode cache file",
                path=self._path,
                details={"errors": e.error_count()},
            ) from e

        cache.rebuild_indexes()
        logger.debug("Loaded cache from %s (%d items)", self._path, len(cache.items))
        return cache

    def _save_sync(self, cache: Cache) -> None:
        payload = cache.model_dump_json(indent=2, exclude_none=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise CacheStoreError(
                f"Failed to write cache file: {e}", path=self._path
            ) from e
        logger.debug("Saved cache to %s", self._path)

    def _delete_sync(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise CacheStoreError(
                f"Failed to delete cache file: {e}", path=self._path
            ) from e
