import time

import pytest
from fastapi import status
from httpx import AsyncClient
from jose import jwt

from app.core.auth import get_current_user
from app.core.config import settings
from conftest import TEST_USER_ID

pytestmark = pytest.mark.asyncio

JWT_SECRET = "test-jwt-secret"


def make_token(secret: str = JWT_SECRET, **claims) -> str:
    payload = {
        "sub": str(TEST_USER_ID),
        "email": "lawyer@example.com",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def real_auth(test_app, monkeypatch):
    """Resolve users from bearer tokens instead of the fixed test user."""
    test_app.dependency_overrides.pop(get_current_user, None)
    monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", JWT_SECRET)


class TestTokenVerification:
    async def test_valid_token(self, client: AsyncClient, real_auth):
        """A token signed with the project secret identifies the user."""
        response = await client.get(
            "/api/v1/auth/me",
            headers={"Authorization": f"Bearer {make_token()}"}
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == str(TEST_USER_ID)
        assert data["email"] == "lawyer@example.com"

    async def test_missing_token(self, client: AsyncClient, real_auth):
        response = await client.get("/api/v1/cases/")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_wrong_secret(self, client: AsyncClient, real_auth):
        response = await client.get(
            "/api/v1/cases/",
            headers={"Authorization": f"Bearer {make_token(secret='another-secret')}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_expired_token(self, client: AsyncClient, real_auth):
        token = make_token(exp=int(time.time()) - 60)
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_wrong_audience(self, client: AsyncClient, real_auth):
        token = make_token(aud="anon")
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_falls_back_to_supabase_auth(
        self,
        client: AsyncClient,
        fake_supabase,
        real_auth,
        monkeypatch
    ):
        """Without a JWT secret the token is checked by Supabase Auth."""
        monkeypatch.setattr(settings, "SUPABASE_JWT_SECRET", "")
        fake_supabase.auth.add_user("clerk@example.com", "secret", "opaque-token", str(TEST_USER_ID))

        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer opaque-token"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == "clerk@example.com"

        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer unknown"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestSession:
    async def test_login_user(self, client: AsyncClient, fake_supabase):
        """Test user login."""
        fake_supabase.auth.add_user("lawyer@example.com", "correct-horse", "access-1")

        response = await client.post(
            "/api/v1/auth/login",
            data={"username": "lawyer@example.com", "password": "correct-horse"}
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["access_token"] == "access-1"
        assert data["refresh_token"] == "refresh-access-1"
        assert data["token_type"] == "bearer"

    async def test_login_wrong_password(self, client: AsyncClient, fake_supabase):
        """Test login with wrong password."""
        fake_supabase.auth.add_user("lawyer@example.com", "correct-horse", "access-1")

        response = await client.post(
            "/api/v1/auth/login",
            data={"username": "lawyer@example.com", "password": "wrongpassword"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_refresh_token(self, client: AsyncClient, fake_supabase):
        fake_supabase.auth.add_user("lawyer@example.com", "correct-horse", "access-1")

        response = await client.post("/api/v1/auth/refresh-token", json={"refresh_token": "refresh-access-1"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["access_token"] == "access-1"

        response = await client.post("/api/v1/auth/refresh-token", json={"refresh_token": "stale"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_logout(self, client: AsyncClient, fake_supabase):
        response = await client.post("/api/v1/auth/logout")
        assert response.status_code == status.HTTP_200_OK
        assert fake_supabase.auth.signed_out
