"""
Exception hierarchy for the Todoist cache.

All errors raised by this package derive from TodoistCacheError so callers
can catch them with a single except clause, while the concrete subclasses
keep lookup misses, persistence failures and sync failures apart.

Hierarchy:
    TodoistCacheError
    ├── CacheStoreError
    ├── SyncError
    │   └── SyncTokenInvalidError
    └── NotFoundError
        └── AmbiguousItemError

Filter parsing errors live in todoist_cache.filter.errors and also derive
from TodoistCacheError.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence


class TodoistCacheError(Exception):
    """Base exception for all cache errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class CacheStoreError(TodoistCacheError):
    """Reading or writing the persisted cache snapshot failed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.path = path


class SyncError(TodoistCacheError):
    """Base class for errors reported by a sync client."""


class SyncTokenInvalidError(SyncError):
    """
    The server rejected the stored sync token.

    Sync clients raise this so the SyncManager can fall back to a full sync.
    """

    def __init__(
        self,
        message: str = "sync token invalid or expired, full sync required",
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)


def format_not_found_error(
    resource_type: str,
    identifier: str,
    suggestion: str | None = None,
) -> str:
    """Build the user-facing message for a failed lookup."""
    message = (
        f"{resource_type} '{identifier}' not found. "
        "Try syncing to refresh your cache."
    )
    if suggestion:
        message += f" Did you mean '{suggestion}'?"
    return message


class NotFoundError(TodoistCacheError):
    """A named or identified resource is not present in the cache."""

    def __init__(
        self,
        resource_type: str,
        identifier: str,
        suggestion: str | None = None,
        *,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message or format_not_found_error(resource_type, identifier, suggestion),
            details={"resource_type": resource_type, "identifier": identifier},
        )
        self.resource_type = resource_type
        self.identifier = identifier
        self.suggestion = suggestion


class AmbiguousItemError(NotFoundError):
    """An ID prefix matches more than one item."""

    MAX_LISTED = 5

    def __init__(self, prefix: str, matches: Sequence[Any]) -> None:
        self.matches = list(matches)
        lines = [f'Ambiguous task ID "{prefix}"', "", "Multiple tasks match this prefix:"]
        for item in self.matches[: self.MAX_LISTED]:
            lines.append(f"  {item.id[:6]}  {item.content}")
        if len(self.matches) > self.MAX_LISTED:
            lines.append(f"  ... and {len(self.matches) - self.MAX_LISTED} more")
        lines.extend(["", "Please use a longer prefix."])
        super().__init__("Item", prefix, message="\n".join(lines))
