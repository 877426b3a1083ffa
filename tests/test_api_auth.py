"""Tests for authentication API endpoints."""

import pytest
from httpx import AsyncClient

from cinedesk.models.admin import Admin


class TestLogin:
    """Tests for POST /api/auth/login."""

    @pytest.mark.asyncio
    async def test_login_success_starts_session(self, client: AsyncClient, test_admin: Admin, admin_token: str):
        """Test a valid email + token logs in and /me then works."""
        response = await client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "token": admin_token},
        )
        assert response.status_code == 200
        assert response.json()["email"] == "admin@example.com"

        me = await client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["id"] == test_admin.id
        assert me.json()["display_name"] == "Test Admin"

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, client: AsyncClient, test_admin: Admin, admin_token: str):
        """Test emails are compared lowercased."""
        response = await client.post(
            "/api/auth/login",
            json={"email": "  Admin@Example.COM ", "token": admin_token},
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_login_wrong_token(self, client: AsyncClient, test_admin: Admin):
        """Test a wrong token is rejected."""
        response = await client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "token": "not-the-token"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient, test_admin: Admin, admin_token: str):
        """Test an unknown email gets the same answer as a wrong token."""
        response = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "token": admin_token},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"


class TestSession:
    """Tests for /me and logout."""

    @pytest.mark.asyncio
    async def test_me_unauthenticated(self, client: AsyncClient):
        """Test getting current admin when not authenticated."""
        response = await client.get("/api/auth/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_authenticated(self, authenticated_client: AsyncClient):
        """Test getting current admin when authenticated."""
        response = await authenticated_client.get("/api/auth/me")
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "admin@example.com"
        assert "token_hash" not in data

    @pytest.mark.asyncio
    async def test_logout_ends_session(self, client: AsyncClient, test_admin: Admin, admin_token: str):
        """Test logout clears the session cookie contents."""
        await client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "token": admin_token},
        )

        response = await client.post("/api/auth/logout")
        assert response.status_code == 200
        assert response.json() == {"status": "logged_out"}

        me = await client.get("/api/auth/me")
        assert me.status_code == 401

    @pytest.mark.asyncio
    async def test_protected_endpoints_without_auth(self, client: AsyncClient):
        """Test that admin endpoints require authentication."""
        for method, url in [
            ("GET", "/api/admin/films"),
            ("POST", "/api/admin/films"),
            ("GET", "/api/tmdb/movie-search?query=dune"),
        ]:
            response = await client.request(method, url, data={"payload": "{}"} if method == "POST" else None)
            assert response.status_code == 401, url
