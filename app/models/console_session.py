"""Response model for the admin console session."""

from typing import Optional

from pydantic import computed_field
from sqlmodel import SQLModel

from app.services.console_session import ConsoleSession, Role


class ConsoleSessionRead(SQLModel):
    user_id: Optional[str] = None
    role: Role = Role.unknown
    edit_preference: Optional[bool] = None

    @computed_field  # type: ignore[misc]
    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin

    @computed_field  # type: ignore[misc]
    @property
    def is_editing(self) -> bool:
        """Edit triggers are shown only to admins who have editing on."""
        return self.is_admin and self.edit_preference is True

    @classmethod
    def from_session(cls, session: ConsoleSession) -> "ConsoleSessionRead":
        return cls(
            user_id=session.user_id,
            role=session.role,
            edit_preference=session.edit_preference,
        )
