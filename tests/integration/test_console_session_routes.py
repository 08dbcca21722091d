"""Integration tests for the admin console session API."""

from typing import Optional

import pytest

from app.config import settings
from app.services.console_session import Role


@pytest.fixture()
def role_lookup_override():
    """Route role lookups to a fixed table for the duration of a test."""
    from app.main import app
    from app.routes.console import get_role_lookup

    roles = {"admin-1": Role.admin, "reader-1": Role.reader}

    async def lookup(user_id: str) -> Optional[Role]:
        if user_id == "broken":
            raise ConnectionError("role store unavailable")
        return roles.get(user_id)

    app.dependency_overrides[get_role_lookup] = lambda: lookup
    try:
        yield roles
    finally:
        app.dependency_overrides.pop(get_role_lookup, None)


@pytest.mark.asyncio
async def test_admin_without_saved_preference_is_editing(app_client, role_lookup_override):
    response = await app_client.get("/api/session", params={"user_id": "admin-1"})
    assert response.status_code == 200
    assert response.json() == {
        "user_id": "admin-1",
        "role": "admin",
        "edit_preference": True,
        "is_admin": True,
        "is_editing": True,
    }


@pytest.mark.asyncio
async def test_saved_preference_is_respected(app_client, role_lookup_override):
    payload = (
        await app_client.get("/api/session", params={"user_id": "admin-1", "edit_preference": "false"})
    ).json()
    assert payload["is_admin"] is True
    assert payload["is_editing"] is False


@pytest.mark.asyncio
async def test_signed_out_viewer_is_reader(app_client, role_lookup_override):
    payload = (await app_client.get("/api/session", params={"edit_preference": "true"})).json()
    assert payload["user_id"] is None
    assert payload["role"] == "reader"
    assert payload["edit_preference"] is False
    assert payload["is_editing"] is False


@pytest.mark.asyncio
async def test_failed_lookup_falls_back_to_reader(app_client, role_lookup_override):
    payload = (await app_client.get("/api/session", params={"user_id": "broken"})).json()
    assert payload["role"] == "reader"
    assert payload["is_editing"] is False


@pytest.mark.asyncio
async def test_toggle_flips_edit_mode(app_client, role_lookup_override):
    response = await app_client.post(
        "/api/session/toggle", params={"user_id": "admin-1", "edit_preference": "true"}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["edit_preference"] is False
    assert payload["is_editing"] is False

    again = (
        await app_client.post("/api/session/toggle", params={"user_id": "admin-1", "edit_preference": "false"})
    ).json()
    assert again["is_editing"] is True


@pytest.mark.asyncio
async def test_toggle_does_not_make_reader_edit(app_client, role_lookup_override):
    payload = (await app_client.post("/api/session/toggle", params={"user_id": "reader-1"})).json()
    assert payload["role"] == "reader"
    assert payload["is_editing"] is False


@pytest.mark.asyncio
async def test_configured_admin_ids(app_client, monkeypatch):
    """Without an override, roles come from the ADMIN_USER_IDS setting."""
    monkeypatch.setattr(settings, "admin_user_ids", "alice, bob")

    admin = (await app_client.get("/api/session", params={"user_id": "bob"})).json()
    reader = (await app_client.get("/api/session", params={"user_id": "carol"})).json()

    assert admin["role"] == "admin"
    assert admin["is_editing"] is True
    assert reader["role"] == "reader"
