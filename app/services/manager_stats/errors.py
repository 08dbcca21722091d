"""Exceptions raised around the manager stats engine.

Lookup misses are deliberately absent: an unresolved join contributes zero,
it never raises.
"""

from typing import Optional


class ManagerStatsError(Exception):
    """Base class for engine errors."""


class DataFetchError(ManagerStatsError):
    """The data store failed to return one collection."""

    def __init__(self, collection: str, cause: Optional[BaseException] = None):
        self.collection = collection
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to fetch {collection}{detail}")
