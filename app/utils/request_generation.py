"""Drop results of async work that has been superseded.

Every trigger calls :meth:`RequestGeneration.issue` and keeps the token; when
the work finishes, its result is applied only if the token is still the latest
one. Starting a newer request or invalidating (the consumer went away) makes
every older token stale.
"""

from __future__ import annotations

import logging
import threading
from typing import Awaitable, Callable, Generic, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestGeneration:
    def __init__(self) -> None:
        self._current = 0
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        return self._current

    def issue(self) -> int:
        """Start a new request and return its token."""
        with self._lock:
            self._current += 1
            return self._current

    def invalidate(self) -> None:
        """Make every token issued so far stale."""
        with self._lock:
            self._current += 1

    def is_current(self, token: int) -> bool:
        return token == self._current


class LatestResult(Generic[T]):
    """Holds the result of the most recent request that completed while still current."""

    def __init__(self, generation: Optional[RequestGeneration] = None) -> None:
        self.generation = generation or RequestGeneration()
        self.value: Optional[T] = None

    async def run(self, work: Callable[[], Awaitable[T]]) -> Tuple[bool, Optional[T]]:
        """Await ``work`` and keep its result only if no newer request started.

        Returns:
            Tuple of (applied, result); ``result`` is ``None`` when dropped
        """
        token = self.generation.issue()
        result = await work()
        if not self.generation.is_current(token):
            logger.debug(f"Dropping stale result for request {token} (latest {self.generation.current})")
            return False, None
        self.value = result
        return True, result

    def cancel(self) -> None:
        self.generation.invalidate()
