"""
Record store, index layer, merge engine and JSON persistence.
"""

from todoist_cache.cache.cache import Cache
from todoist_cache.cache.indexes import CacheIndexes
from todoist_cache.cache.merge import (
    apply_mutation_response,
    apply_sync_response,
    merge_resources,
)
from todoist_cache.cache.store import JsonCacheStore

__all__ = [
    "Cache",
    "CacheIndexes",
    "JsonCacheStore",
    "apply_mutation_response",
    "apply_sync_response",
    "merge_resources",
]
