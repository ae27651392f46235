"""
Sync API wire types consumed and produced by the cache.
"""

from todoist_cache.sync.commands import SyncCommand, SyncCommandType
from todoist_cache.sync.response import CommandError, CommandStatus, SyncResponse

__all__ = [
    "CommandError",
    "CommandStatus",
    "SyncCommand",
    "SyncCommandType",
    "SyncResponse",
]
