"""Memoization of engine results for the most recent snapshot."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Hashable, Optional, TypeVar

from app.services.manager_stats.types import LeagueSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SnapshotCache:
    """Remember results computed against one snapshot.

    Entries are keyed by ``(operation, *args)`` and belong to the snapshot
    object they were computed from. Handing in a different snapshot object
    (a new fetch) drops everything memoized so far. Results are never shared
    across snapshots, even when their contents compare equal.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.hits = 0
        self.misses = 0
        self._snapshot: Optional[LeagueSnapshot] = None
        self._results: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()

    @property
    def current_snapshot(self) -> Optional[LeagueSnapshot]:
        return self._snapshot

    def __len__(self) -> int:
        return len(self._results)

    def get_or_compute(
        self, snapshot: LeagueSnapshot, key: Hashable, compute: Callable[[], T]
    ) -> T:
        if not self.enabled:
            self.misses += 1
            return compute()

        with self._lock:
            if snapshot is not self._snapshot:
                if self._snapshot is not None:
                    logger.debug(f"New snapshot; dropping {len(self._results)} cached results")
                self._snapshot = snapshot
                self._results = {}
            elif key in self._results:
                self.hits += 1
                return self._results[key]

        # compute() may run twice under contention; both results are identical
        value = compute()
        with self._lock:
            self.misses += 1
            if snapshot is self._snapshot:
                self._results[key] = value
        return value

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
            self._results = {}
