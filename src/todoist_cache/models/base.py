"""
Shared base for cached Sync API resources.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Resource(BaseModel):
    """
    A record from one of the cached collections.

    Every resource has a stable string ID and a soft-delete flag. Deleted
    resources only appear inside sync deltas; the cache never keeps them.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    is_deleted: bool = False
