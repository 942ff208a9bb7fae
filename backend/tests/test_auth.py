"""Tests for bearer token authentication."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from snapaml.auth.jwt import create_access_token, decode_token
from snapaml.config import settings


@pytest.mark.unit
class TestTokens:

    def test_round_trip_claims(self):
        token = create_access_token("user-42", email="u@example.com")
        payload = decode_token(token)
        assert payload["sub"] == "user-42"
        assert payload["email"] == "u@example.com"
        assert payload["aud"] == settings.jwt_audience

    def test_garbage_token(self):
        assert decode_token("not.a.token") == {}

    def test_expired_token(self):
        token = create_access_token("user-42", expires_delta=timedelta(seconds=-10))
        assert decode_token(token) == {}


@pytest.mark.api
@pytest.mark.asyncio
class TestAuthenticatedEndpoints:

    async def test_missing_token(self, client: AsyncClient):
        resp = await client.get("/api/profile")
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "NOT_AUTHENTICATED"

    async def test_expired_token(self, client: AsyncClient):
        token = create_access_token("user-1", expires_delta=timedelta(minutes=-1))
        resp = await client.get("/api/kyb/", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_wrong_secret(self, client: AsyncClient):
        token = jwt.encode(
            {"sub": "user-1", "aud": settings.jwt_audience},
            "some-other-secret",
            algorithm=settings.jwt_algorithm,
        )
        resp = await client.get("/api/kyb/", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_wrong_audience(self, client: AsyncClient):
        token = jwt.encode(
            {"sub": "user-1", "aud": "anon"},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        resp = await client.get("/api/kyb/", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    async def test_valid_token(self, client: AsyncClient, auth_headers):
        resp = await client.get("/api/kyb/", headers=auth_headers)
        assert resp.status_code == 200
