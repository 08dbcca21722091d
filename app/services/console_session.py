"""Admin console session state as an immutable, explicitly passed value.

Edit mode used to live in a persisted global toggle next to a cached role.
Here both travel together in :class:`ConsoleSession`; every change returns a
new session instead of mutating shared state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Awaitable, Callable, Optional

from app.utils.request_generation import LatestResult

logger = logging.getLogger(__name__)


class Role(str, Enum):
    admin = "admin"
    reader = "reader"
    unknown = "unknown"


@dataclass(frozen=True, slots=True)
class ConsoleSession:
    user_id: Optional[str] = None
    role: Role = Role.unknown
    edit_preference: Optional[bool] = None  # None: never saved

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin

    @property
    def is_editing(self) -> bool:
        return self.is_admin and self.edit_preference is True

    def toggled(self) -> "ConsoleSession":
        return replace(self, edit_preference=not bool(self.edit_preference))

    def refreshed(self, user_id: Optional[str], role: Optional[Role]) -> "ConsoleSession":
        """Apply a freshly resolved user/role.

        Signed-out users become readers with editing off. An admin who never
        saved a preference gets editing switched on.
        """
        if user_id is None:
            return ConsoleSession(user_id=None, role=Role.reader, edit_preference=False)

        resolved = role or Role.reader
        preference = self.edit_preference
        if resolved == Role.admin and preference is None:
            preference = True
        return ConsoleSession(user_id=user_id, role=resolved, edit_preference=preference)


RoleLookup = Callable[[str], Awaitable[Optional[Role]]]


class SessionBootstrapper:
    """Resolve the viewer's role, keeping only the latest resolution.

    Auth state can change several times while a lookup is in flight; older
    lookups finishing late are ignored.
    """

    def __init__(self, lookup_role: RoleLookup) -> None:
        self.lookup_role = lookup_role
        self._latest: LatestResult[ConsoleSession] = LatestResult()

    async def _resolve(self, current: ConsoleSession, user_id: Optional[str]) -> ConsoleSession:
        if user_id is None:
            return current.refreshed(None, None)
        try:
            role = await self.lookup_role(user_id)
        except Exception:
            logger.exception(f"Role lookup failed for user {user_id}; falling back to reader")
            role = Role.reader
        return current.refreshed(user_id, role)

    async def refresh(
        self, current: ConsoleSession, user_id: Optional[str]
    ) -> Optional[ConsoleSession]:
        """Return the refreshed session, or ``None`` if a newer refresh superseded it."""
        applied, session = await self._latest.run(lambda: self._resolve(current, user_id))
        return session if applied else None

    def close(self) -> None:
        self._latest.cancel()
