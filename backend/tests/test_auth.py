"""Tests for sign-up, sign-in and sessions."""

import pytest
from httpx import AsyncClient

from airsense.services import hash_password, verify_password


def test_password_hash_round_trip():
    hashed = hash_password("secret123")
    assert "secret123" not in hashed
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_password_hashes_are_salted():
    assert hash_password("secret123") != hash_password("secret123")


def test_malformed_hash_does_not_verify():
    assert not verify_password("secret123", "not-a-hash")


@pytest.mark.asyncio
async def test_signup(client: AsyncClient):
    response = await client.post(
        "/api/auth/signup",
        json={"email": "ada@example.com", "password": "secret123", "name": "Ada"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "ada@example.com"
    assert data["name"] == "Ada"
    assert "password" not in data
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient):
    body = {"email": "ada@example.com", "password": "secret123", "name": "Ada"}
    await client.post("/api/auth/signup", json=body)
    response = await client.post("/api/auth/signup", json=body)
    assert response.status_code == 409
    assert "already registered" in response.json()["detail"]


@pytest.mark.asyncio
async def test_signup_rejects_short_password(client: AsyncClient):
    response = await client.post(
        "/api/auth/signup",
        json={"email": "ada@example.com", "password": "123", "name": "Ada"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_returns_token_and_user(client: AsyncClient):
    await client.post(
        "/api/auth/signup",
        json={"email": "ada@example.com", "password": "secret123", "name": "Ada"},
    )
    response = await client.post(
        "/api/auth/login", json={"email": "ada@example.com", "password": "secret123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient):
    await client.post(
        "/api/auth/signup",
        json={"email": "ada@example.com", "password": "secret123", "name": "Ada"},
    )
    response = await client.post(
        "/api/auth/login", json={"email": "ada@example.com", "password": "nope-nope"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    response = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_me_requires_token(client: AsyncClient):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(client: AsyncClient):
    response = await client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_invalidates_token(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = await client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_sessions_are_independent(client: AsyncClient, sign_in):
    first = await sign_in()
    second = await sign_in()

    await client.post("/api/auth/logout", headers=first)

    assert (await client.get("/api/auth/me", headers=first)).status_code == 401
    assert (await client.get("/api/auth/me", headers=second)).status_code == 200
