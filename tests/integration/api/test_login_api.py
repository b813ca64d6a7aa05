"""
Integration tests for POST /auth/login and GET /auth/me
"""
import pytest
from httpx import AsyncClient

from src.domain.entities import UserRole


@pytest.mark.asyncio
async def test_login_returns_bearer_token_usable_on_me(client: AsyncClient, create_user, audit_sink):
    user = await create_user(email="user@example.com", role=UserRole.ADMIN, name="Root")
    user_id = str(user.id)

    login = await client.post(
        "/auth/login", json={"email": "User@Example.com", "password": "Password123"}
    )

    assert login.status_code == 200
    data = login.json()
    assert data["token_type"] == "bearer"
    assert data["expires_in"] > 0
    assert data["user"] == {
        "id": user_id,
        "email": "user@example.com",
        "name": "Root",
        "role": "ADMIN",
    }
    assert "AUTH_SUCCESS" in audit_sink.actions()

    me = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["id"] == user_id
    assert me.json()["role"] == "ADMIN"


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_look_the_same(
    client: AsyncClient, create_user, audit_sink
):
    await create_user(email="user@example.com")

    wrong = await client.post("/auth/login", json={"email": "user@example.com", "password": "nope-nope"})
    unknown = await client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope-nope"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"

    reasons = [r["fields"]["reason"] for r in audit_sink.records if r["action"] == "AUTH_FAILURE"]
    assert reasons == ["invalid_password", "user_not_found_or_no_password"]


@pytest.mark.asyncio
async def test_unverified_user_with_correct_password_is_forbidden(client: AsyncClient, create_user):
    await create_user(email="new@example.com", verified=False)

    response = await client.post(
        "/auth/login", json={"email": "new@example.com", "password": "Password123"}
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "EMAIL_NOT_VERIFIED"


@pytest.mark.asyncio
async def test_federated_account_cannot_password_login(client: AsyncClient, create_user):
    await create_user(email="oauth@example.com", password=None)

    response = await client.post(
        "/auth/login", json={"email": "oauth@example.com", "password": "Password123"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_me_without_token_is_unauthorized(client: AsyncClient):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_me_with_garbage_token_is_unauthorized(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer not.a.jwt"})

    assert response.status_code == 401
