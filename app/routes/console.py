from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.config import settings
from app.models.console_session import ConsoleSessionRead
from app.services.console_session import ConsoleSession, Role, RoleLookup, SessionBootstrapper

router = APIRouter(prefix="/api/session", tags=["session"])


async def lookup_configured_role(user_id: str) -> Optional[Role]:
    return Role.admin if user_id in settings.admin_ids else Role.reader


def get_role_lookup() -> RoleLookup:
    return lookup_configured_role


async def _resolve(
    lookup_role: RoleLookup, user_id: Optional[str], edit_preference: Optional[bool]
) -> ConsoleSession:
    bootstrapper = SessionBootstrapper(lookup_role)
    session = await bootstrapper.refresh(ConsoleSession(edit_preference=edit_preference), user_id)
    if session is None:
        raise HTTPException(status_code=409, detail="Session refresh was superseded")
    return session


@router.get("", response_model=ConsoleSessionRead)
async def console_session(
    user_id: Optional[str] = Query(None, description="Signed-in user; omit when signed out"),
    edit_preference: Optional[bool] = Query(None, description="Saved edit-mode preference, if any"),
    lookup_role: RoleLookup = Depends(get_role_lookup),
) -> ConsoleSessionRead:
    """Resolve the viewer's role and whether the console is in edit mode."""
    session = await _resolve(lookup_role, user_id, edit_preference)
    return ConsoleSessionRead.from_session(session)


@router.post("/toggle", response_model=ConsoleSessionRead)
async def toggle_edit_mode(
    user_id: Optional[str] = Query(None),
    edit_preference: Optional[bool] = Query(None),
    lookup_role: RoleLookup = Depends(get_role_lookup),
) -> ConsoleSessionRead:
    """Flip edit mode and return the new session; the caller stores the preference."""
    session = await _resolve(lookup_role, user_id, edit_preference)
    return ConsoleSessionRead.from_session(session.toggled())
