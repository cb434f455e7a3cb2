"""Integration tests for authentication API endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.core.security import create_admin_token, create_user_token
from subsentinel.models.user import User
from subsentinel.repositories.user import UserRepository

PHONE = "+15551234567"


class TestOTPSend:
    @pytest.mark.asyncio
    async def test_send_otp_success(self, client: AsyncClient):
        response = await client.post("/auth/otp/send", json={"phone": PHONE})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "OTP sent"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("phone", ["5551234567", "+0123456789", "not-a-phone", ""])
    async def test_send_otp_invalid_phone(self, client: AsyncClient, phone: str):
        response = await client.post("/auth/otp/send", json={"phone": phone})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error_code"] == "VAL_001"


class TestOTPVerify:
    """Test phone login."""

    @pytest.mark.asyncio
    async def test_verify_creates_user(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post("/auth/otp/verify", json={"phone": PHONE, "code": "123456"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["phone"] == PHONE
        assert data["token"]

        user = await UserRepository(db_session).get_by_phone(PHONE)
        assert user is not None
        assert str(user.id) == data["user"]["id"]

    @pytest.mark.asyncio
    async def test_verify_twice_returns_same_user(self, client: AsyncClient):
        first = await client.post("/auth/otp/verify", json={"phone": PHONE, "code": "123456"})
        second = await client.post("/auth/otp/verify", json={"phone": PHONE, "code": "123456"})

        assert first.json()["user"]["id"] == second.json()["user"]["id"]

    @pytest.mark.asyncio
    async def test_verify_wrong_code(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post("/auth/otp/verify", json={"phone": PHONE, "code": "000000"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid OTP", "error_code": "OTP_001"}
        assert await UserRepository(db_session).get_by_phone(PHONE) is None

    @pytest.mark.asyncio
    async def test_verify_missing_code(self, client: AsyncClient):
        response = await client.post("/auth/otp/verify", json={"phone": PHONE})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_end_to_end_phone_login_and_create(self, client: AsyncClient):
        """Send OTP, verify it, then use the token to create a subscription."""
        response = await client.post("/auth/otp/send", json={"phone": PHONE})
        assert response.json()["success"] is True

        response = await client.post("/auth/otp/verify", json={"phone": PHONE, "code": "123456"})
        body = response.json()
        assert body["success"] is True
        assert body["user"]["phone"] == PHONE
        token = body["token"]

        response = await client.post(
            "/subscriptions",
            json={"provider": "Netflix", "amount": 15.49, "next_billing": "2025-01-01T00:00:00Z"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "active"
        assert data["currency"] == "USD"
        assert data["provider"] == "Netflix"
        assert data["amount"] == 15.49
        assert data["userId"] == body["user"]["id"]


class TestGoogleLogin:
    @pytest.mark.asyncio
    async def test_google_login_creates_user(self, client: AsyncClient, db_session: AsyncSession):
        response = await client.post("/auth/google", json={"token": "mock-g123"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["email"] == "g123@example.com"
        assert data["user"]["displayName"] == "g123"
        assert data["user"]["phone"] is None
        assert data["token"]

        user = await UserRepository(db_session).get_by_google_id("g123")
        assert user is not None

    @pytest.mark.asyncio
    async def test_google_login_is_idempotent(self, client: AsyncClient):
        first = await client.post("/auth/google", json={"token": "mock-g123"})
        second = await client.post("/auth/google", json={"token": "mock-g123"})

        assert first.json()["user"]["id"] == second.json()["user"]["id"]

    @pytest.mark.asyncio
    async def test_google_login_invalid_token(self, client: AsyncClient):
        response = await client.post("/auth/google", json={"token": "forged"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "IDP_001"


class TestCurrentUser:
    """Test bearer-token authentication on a protected endpoint."""

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, test_user: User, auth_headers: dict):
        response = await client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(test_user.id)
        assert data["phone"] == test_user.phone
        assert "createdAt" in data

    @pytest.mark.asyncio
    async def test_missing_header(self, client: AsyncClient):
        response = await client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_002"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_non_bearer_scheme(self, client: AsyncClient):
        response = await client.get("/auth/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_002"

    @pytest.mark.asyncio
    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_003"

    @pytest.mark.asyncio
    async def test_admin_token_rejected(self, client: AsyncClient, test_user: User):
        token = create_admin_token(test_user.id)
        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_unknown_user(self, client: AsyncClient, setup_database):
        token = create_user_token(uuid4())
        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_003"
