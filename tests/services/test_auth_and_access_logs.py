"""Auth + Access Logs — verifies login outcomes and session bookkeeping.

Invariants:
    - Unknown email and wrong password fail the same way (401)
    - Inactive accounts are refused (403) only after the password matched
    - Legacy plaintext digests still log in
    - Logout closes a session once and computes its duration
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import insert

from aquatour.core.errors import (
    AuthenticationError, ForbiddenError, NotFoundError, ValidationError,
)
from aquatour.models import User
from aquatour.services.access_log_service import AccessLogService
from aquatour.services.auth_service import AuthService


@pytest.fixture
def access_logs(gateway):
    return AccessLogService(gateway)


@pytest.fixture
def auth(users, access_logs):
    return AuthService(users, access_logs)


async def test_login_returns_user_and_session(auth, advisor, access_logs):
    result = await auth.login("ana@aquatour.test", "secret123", ip_address="10.0.0.1")
    assert result["user"]["id"] == advisor["id"]
    assert "password_digest" not in result["user"]

    session = await access_logs.get(result["access_log_id"])
    assert session["user_name"] == "Ana Ruiz"
    assert session["user_role"] == "empleado"
    assert session["ip_address"] == "10.0.0.1"
    assert session["logged_out_at"] is None


@pytest.mark.parametrize("email,password", [
    ("ana@aquatour.test", "wrong"),
    ("nobody@aquatour.test", "secret123"),
])
async def test_bad_credentials_rejected(auth, advisor, email, password):
    with pytest.raises(AuthenticationError) as exc:
        await auth.login(email, password)
    assert exc.value.message == "Invalid credentials"


async def test_missing_credentials(auth):
    with pytest.raises(ValidationError) as exc:
        await auth.login("", None)
    assert exc.value.fields == ["email", "password"]


async def test_inactive_user_forbidden(auth, users, advisor):
    await users.update(advisor["id"], {"isActive": False})
    with pytest.raises(ForbiddenError):
        await auth.login("ana@aquatour.test", "secret123")
    with pytest.raises(AuthenticationError):
        await auth.login("ana@aquatour.test", "wrong")


async def test_legacy_plaintext_password(auth, gateway):
    async with gateway.transaction():
        await gateway.execute(insert(User).values(
            first_name="Old", last_name="User", email="old@x.com",
            password_digest="legacy-pass", role="Administrador",
        ))
    result = await auth.login("old@x.com", "legacy-pass")
    assert result["user"]["role"] == "administrador"


async def test_logout_computes_duration_once(access_logs):
    opened = await access_logs.create({
        "user_id": 1,
        "logged_in_at": (datetime.now(timezone.utc) - timedelta(hours=1, minutes=3)).isoformat(),
    })
    closed = await access_logs.logout(opened["id"])
    assert closed["session_duration"] == "1h 3m"
    assert closed["logged_out_at"] is not None

    again = await access_logs.logout(opened["id"])
    assert again["logged_out_at"] == closed["logged_out_at"]


async def test_logout_missing_session(access_logs):
    with pytest.raises(NotFoundError):
        await access_logs.logout(404)


async def test_list_entries_by_user(access_logs):
    await access_logs.create({"user_id": 1})
    await access_logs.create({"user_id": 2})
    assert [e["user_id"] for e in await access_logs.list_entries(user_id=2)] == [2]
