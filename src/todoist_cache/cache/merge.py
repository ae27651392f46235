"""
Merge engine.

Applies a SyncResponse delta to a Cache. Full syncs replace every
collection; incremental syncs and command submissions update records in
place, append new ones and drop tombstones. The functions are pure: they
return a new Cache and leave both inputs untouched.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence, TypeVar

from todoist_cache.cache.cache import Cache
from todoist_cache.constants import RESOURCE_TYPES
from todoist_cache.models import Resource
from todoist_cache.sync.response import SyncResponse

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str | None, fallback: datetime) -> datetime:
    """Parse an ISO-8601 timestamp, returning fallback when absent or invalid."""
    if not value:
        return fallback
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparsable full_sync_date_utc %r, using current time", value)
        return fallback
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def merge_resources(existing: Sequence[R], incoming: Sequence[R]) -> list[R]:
    """
    Merge a batch of incoming records into an existing collection.

    Each incoming record is classified against the existing IDs:

    - deleted: the existing record is removed (unknown IDs are ignored)
    - known ID: the record replaces the existing one at the same position
    - new ID: the record is appended

    Updates are applied first, then inserts, then removals in descending
    position order. When one batch carries the same ID several times, the
    last occurrence wins. Neither argument is modified.
    """
    positions = {record.id: position for position, record in enumerate(existing)}

    updates: dict[int, R] = {}
    removals: set[int] = set()
    inserts: list[R] = []
    insert_positions: dict[str, int] = {}
    dropped_inserts: set[int] = set()

    for record in incoming:
        if record.is_deleted:
            if record.id in positions:
                position = positions[record.id]
                updates.pop(position, None)
                removals.add(position)
            elif record.id in insert_positions:
                dropped_inserts.add(insert_positions[record.id])
            continue

        copied = record.model_copy(deep=True)
        if record.id in positions:
            position = positions[record.id]
            updates[position] = copied
            removals.discard(position)
        elif record.id in insert_positions:
            slot = insert_positions[record.id]
            inserts[slot] = copied
            dropped_inserts.discard(slot)
        else:
            insert_positions[record.id] = len(inserts)
            inserts.append(copied)

    merged = list(existing)
    for position, record in updates.items():
        merged[position] = record
    merged.extend(
        record for slot, record in enumerate(inserts) if slot not in dropped_inserts
    )
    for position in sorted(removals, reverse=True):
        del merged[position]

    return merged


def _merged_collections(cache: Cache, response: SyncResponse, *, full: bool) -> dict[str, Any]:
    collections: dict[str, Any] = {}
    for name in RESOURCE_TYPES:
        incoming = getattr(response, name)
        existing = [] if full else getattr(cache, name)
        collections[name] = merge_resources(existing, incoming)
    return collections


def _apply(
    cache: Cache,
    response: SyncResponse,
    *,
    full: bool,
    now: datetime | None,
) -> Cache:
    now = now or _utcnow()
    update = _merged_collections(cache, response, full=full)
    update["sync_token"] = response.sync_token
    update["last_sync"] = now
    if full:
        update["full_sync_date_utc"] = _parse_timestamp(response.full_sync_date_utc, now)
    if response.user is not None:
        update["user"] = response.user.model_copy(deep=True)

    merged = cache.model_copy(update=update)
    merged.rebuild_indexes()

    logger.debug(
        "Applied %s sync: %d items, %d projects, %d sections, %d labels",
        "full" if full else "incremental",
        len(merged.items),
        len(merged.projects),
        len(merged.sections),
        len(merged.labels),
    )
    return merged


def apply_sync_response(
    cache: Cache,
    response: SyncResponse,
    *,
    now: datetime | None = None,
) -> Cache:
    """
    Apply a sync response, full or incremental according to response.full_sync.

    A full response replaces every collection (dropping tombstones) and
    records full_sync_date_utc. An incremental one merges record by record.
    In both cases sync_token is overwritten and last_sync set to now.
    """
    return _apply(cache, response, full=response.full_sync, now=now)


def apply_mutation_response(
    cache: Cache,
    response: SyncResponse,
    *,
    now: datetime | None = None,
) -> Cache:
    """
    Apply the response to a command submission.

    Always merged incrementally, whatever response.full_sync says, and
    full_sync_date_utc is left as it was.
    """
    return _apply(cache, response, full=False, now=now)
