"""
Integration tests for POST /auth/forgot-password and POST /auth/reset-password
"""
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import TokenPurpose, VerificationToken


@pytest.mark.asyncio
async def test_forgot_password_response_does_not_reveal_account(
    client: AsyncClient, db_session: AsyncSession, create_user, mailer
):
    await create_user(email="real@x.com")

    missing = await client.post("/auth/forgot-password", json={"email": "missing@x.com"})
    real = await client.post("/auth/forgot-password", json={"email": "real@x.com"})

    assert missing.status_code == real.status_code == 200
    assert missing.json() == real.json()

    assert [m["to"] for m in mailer.sent] == ["real@x.com"]
    tokens = (await db_session.exec(select(VerificationToken))).all()
    assert [(t.purpose, t.identifier) for t in tokens] == [(TokenPurpose.password_reset, "real@x.com")]


@pytest.mark.asyncio
async def test_reset_password_then_login_with_new_password(
    client: AsyncClient, create_user, mailer
):
    await create_user(email="real@x.com", password="OldPassword1")
    await client.post("/auth/forgot-password", json={"email": "real@x.com"})
    token = mailer.last_token("real@x.com")

    reset = await client.post(
        "/auth/reset-password",
        json={"email": "real@x.com", "token": token, "password": "NewPassword2"},
    )
    assert reset.status_code == 200
    assert reset.json()["status"] == "success"

    old_login = await client.post("/auth/login", json={"email": "real@x.com", "password": "OldPassword1"})
    new_login = await client.post("/auth/login", json={"email": "real@x.com", "password": "NewPassword2"})
    assert old_login.status_code == 401
    assert new_login.status_code == 200

    replay = await client.post(
        "/auth/reset-password",
        json={"email": "real@x.com", "token": token, "password": "AnotherPass3"},
    )
    assert replay.status_code == 400
    assert replay.json()["error"]["code"] == "TOKEN_NOT_FOUND"


@pytest.mark.asyncio
async def test_verification_token_cannot_reset_password(client: AsyncClient, mailer):
    await client.post("/auth/register", json={"email": "a@x.com", "password": "Password123"})
    verification_token = mailer.last_token("a@x.com")

    response = await client.post(
        "/auth/reset-password",
        json={"email": "a@x.com", "token": verification_token, "password": "NewPassword2"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_NOT_FOUND"


@pytest.mark.asyncio
async def test_reset_with_weak_password_is_rejected(client: AsyncClient, create_user, mailer):
    await create_user(email="real@x.com")
    await client.post("/auth/forgot-password", json={"email": "real@x.com"})
    token = mailer.last_token("real@x.com")

    weak = await client.post(
        "/auth/reset-password", json={"email": "real@x.com", "token": token, "password": "short"}
    )
    assert weak.status_code == 400
    assert weak.json()["error"]["code"] == "INVALID_PASSWORD"

    # The token survives a rejected password
    ok = await client.post(
        "/auth/reset-password",
        json={"email": "real@x.com", "token": token, "password": "LongEnough1"},
    )
    assert ok.status_code == 200
