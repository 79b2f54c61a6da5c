from datetime import timedelta

import pytest
from httpx import AsyncClient

from auth import hash_password, verify_password
from config import COOKIE_NAME
from database import utcnow


def test_password_hash_round_trip():
    stored = hash_password("s3cret")
    assert stored.startswith("pbkdf2_sha512$")
    assert verify_password("s3cret", stored)
    assert not verify_password("other", stored)
    assert not verify_password("s3cret", "garbage")


@pytest.mark.asyncio
async def test_login_sets_session_cookie(async_client: AsyncClient, admin):
    response = await async_client.post(
        "/api/auth/login", json={"username": "admin", "password": "admin-pass"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"]["username"] == "admin"
    assert data["user"]["isAdmin"] is True
    assert COOKIE_NAME in response.cookies

    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie

    me = await async_client.get("/api/auth/me")
    assert me.json()["user"]["id"] == admin.id


@pytest.mark.asyncio
async def test_bad_credentials_are_logged(async_client: AsyncClient, app, admin):
    wrong = await async_client.post(
        "/api/auth/login", json={"username": "admin", "password": "nope"}
    )
    unknown = await async_client.post(
        "/api/auth/login", json={"username": "ghost", "password": "nope"}
    )

    assert wrong.status_code == 401
    assert wrong.json() == {"detail": "Invalid credentials", "code": "UNAUTHENTICATED"}
    assert unknown.status_code == 401

    logs = app.state.auth_service.recent_logins()
    assert len(logs) == 2
    assert not any(entry.success for entry in logs)
    by_name = {entry.username: entry for entry in logs}
    assert by_name["admin"].user_id == admin.id
    assert by_name["ghost"].user_id is None


@pytest.mark.asyncio
async def test_empty_credentials_are_rejected(async_client: AsyncClient):
    response = await async_client.post("/api/auth/login", json={"username": "", "password": ""})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION"


@pytest.mark.asyncio
async def test_inactive_account_cannot_login(async_client: AsyncClient, app, user):
    app.state.users_service.users.set_active(user.id, False)

    response = await async_client.post(
        "/api/auth/login", json={"username": "alice", "password": "alice-pass"}
    )

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_logout_ends_session(user_client: AsyncClient):
    assert (await user_client.get("/api/auth/me")).json()["user"] is not None

    response = await user_client.post("/api/auth/logout")
    assert response.status_code == 200

    assert (await user_client.get("/api/auth/me")).json() == {"user": None}
    assert (await user_client.get("/api/files")).status_code == 401


@pytest.mark.asyncio
async def test_unknown_cookie_is_unauthenticated(async_client: AsyncClient):
    async_client.cookies.set(COOKIE_NAME, "not-a-session")

    assert (await async_client.get("/api/auth/me")).json() == {"user": None}
    response = await async_client.get("/api/stats")
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


def test_session_slides_forward(app, user):
    service = app.state.auth_service
    session, _ = service.login("alice", "alice-pass")
    later = session.expires_at - timedelta(minutes=1)

    identity = service.validate_session(session.id, now=later)

    assert identity.username == "alice"
    refreshed = service.sessions.get(session.id)
    assert refreshed.expires_at == later + service.session_duration


def test_expired_session_is_deleted(app, user):
    service = app.state.auth_service
    session, _ = service.login("alice", "alice-pass")

    assert service.validate_session(session.id, now=session.expires_at + timedelta(seconds=1)) is None
    assert service.sessions.get(session.id) is None


def test_disabled_account_loses_session(app, user):
    service = app.state.auth_service
    session, _ = service.login("alice", "alice-pass")
    service.users.set_active(user.id, False)

    assert service.validate_session(session.id, now=utcnow()) is None
    assert service.sessions.get(session.id) is None


@pytest.mark.asyncio
async def test_login_logs_require_admin(admin_client: AsyncClient, user_client: AsyncClient):
    assert (await user_client.get("/api/login-logs")).status_code == 403

    response = await admin_client.get("/api/login-logs")
    assert response.status_code == 200
    usernames = {entry["username"] for entry in response.json()["logs"]}
    assert usernames == {"admin", "alice"}
    assert all(entry["success"] for entry in response.json()["logs"])
