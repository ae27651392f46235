"""
Todoist Cache - local-first cache for the Todoist Sync API.

This package keeps a local copy of a Todoist account (tasks, projects,
sections, labels, comments, reminders and saved filters), brings it up to
date with full or incremental syncs, and answers queries with the Todoist
filter language without touching the network.

Architecture:
       Callers (CLI, services)
              │
              ▼
         SyncManager  ──────►  SyncClient (network)
        (orchestration)
          │       │
          ▼       └──────────►  CacheStorage (persistence)
     Merge Engine
          │
          ▼
    Cache + Indexes  ◄────────  Filter Language
    (record store)             (lexer, parser, evaluator)
"""

import logging

__version__ = "0.1.0"
__author__ = "Todoist Cache Contributors"

from todoist_cache.cache import (
    Cache,
    CacheIndexes,
    JsonCacheStore,
    apply_mutation_response,
    apply_sync_response,
    merge_resources,
)
from todoist_cache.exceptions import (
    AmbiguousItemError,
    CacheStoreError,
    NotFoundError,
    SyncError,
    SyncTokenInvalidError,
    TodoistCacheError,
)
from todoist_cache.filter import (
    FilterContext,
    FilterError,
    FilterEvaluator,
    FilterParser,
    parse_filter,
    select_items,
)
from todoist_cache.manager import SyncManager
from todoist_cache.protocols import CacheStorage, SyncClient
from todoist_cache.settings import Settings, get_settings
from todoist_cache.sync import SyncCommand, SyncCommandType, SyncResponse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Cache
    "Cache",
    "CacheIndexes",
    "JsonCacheStore",
    "apply_sync_response",
    "apply_mutation_response",
    "merge_resources",
    # Sync
    "SyncManager",
    "SyncClient",
    "CacheStorage",
    "SyncCommand",
    "SyncCommandType",
    "SyncResponse",
    # Filters
    "FilterParser",
    "FilterEvaluator",
    "FilterContext",
    "parse_filter",
    "select_items",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "TodoistCacheError",
    "CacheStoreError",
    "SyncError",
    "SyncTokenInvalidError",
    "NotFoundError",
    "AmbiguousItemError",
    "FilterError",
]
