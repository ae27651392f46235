"""
Sync orchestration and resource lookups.
"""

from todoist_cache.manager.lookups import (
    ResourceLookupMixin,
    find_items_by_prefix,
    find_similar_name,
)
from todoist_cache.manager.sync_manager import SyncManager

__all__ = [
    "SyncManager",
    "ResourceLookupMixin",
    "find_items_by_prefix",
    "find_similar_name",
]
