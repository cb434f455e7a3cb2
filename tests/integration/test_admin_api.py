"""Integration tests for the admin panel endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.core.security import create_user_token
from subsentinel.integrations.identity import MockIdentityVerifier
from subsentinel.models.admin import Admin
from subsentinel.models.category import Category
from subsentinel.models.device_token import DeviceToken
from subsentinel.models.preferences import UserPreferences
from subsentinel.models.subscription import Subscription
from subsentinel.models.user import User
from subsentinel.repositories.category import CategoryRepository
from subsentinel.repositories.user import UserRepository

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password-123"


class TestAdminLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, admin: Admin):
        response = await client.post(
            "/admin/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["admin"]["username"] == ADMIN_USERNAME
        assert data["admin"]["id"] == str(admin.id)
        assert "password_hash" not in data["admin"]
        assert data["token"]

    @pytest.mark.asyncio
    async def test_username_is_case_insensitive(self, client: AsyncClient, admin: Admin):
        response = await client.post(
            "/admin/auth/login", json={"username": " Admin ", "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_are_indistinguishable(
        self, client: AsyncClient, admin: Admin
    ):
        wrong_password = await client.post(
            "/admin/auth/login", json={"username": ADMIN_USERNAME, "password": "nope"}
        )
        unknown_user = await client.post(
            "/admin/auth/login", json={"username": "ghost", "password": "nope"}
        )

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json() == {
            "success": False,
            "error": "Invalid credentials",
            "error_code": "AUTH_001",
        }

    @pytest.mark.asyncio
    async def test_admin_token_works_on_admin_routes(self, client: AsyncClient, admin_headers: dict):
        response = await client.get("/admin/auth/me", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["username"] == ADMIN_USERNAME

    @pytest.mark.asyncio
    async def test_user_token_rejected(self, client: AsyncClient, admin: Admin, auth_headers: dict):
        response = await client.get("/admin/categories", headers=auth_headers)

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_003"

    @pytest.mark.asyncio
    async def test_user_token_with_admin_id_rejected(self, client: AsyncClient, admin: Admin):
        token = create_user_token(admin.id)
        response = await client.get("/admin/categories", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_admin_token_rejected_on_user_routes(self, client: AsyncClient, admin_headers: dict):
        response = await client.get("/subscriptions", headers=admin_headers)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient, setup_database):
        response = await client.get("/admin/users")
        assert response.status_code == 401


class TestAdminCategories:
    @pytest.mark.asyncio
    async def test_crud(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/admin/categories",
            json={"name": "AI Tools", "icon": "smart_toy", "color": "#10A37F"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        created = response.json()
        assert created["isDefault"] is True
        assert created["userId"] is None

        response = await client.patch(
            f"/admin/categories/{created['id']}", json={"name": "AI"}, headers=admin_headers
        )
        assert response.json()["name"] == "AI"

        response = await client.get("/admin/categories", headers=admin_headers)
        assert [c["name"] for c in response.json()] == ["AI"]

        response = await client.delete(f"/admin/categories/{created['id']}", headers=admin_headers)
        assert response.json() == {"success": True}

        response = await client.delete(f"/admin/categories/{created['id']}", headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_new_default_visible_to_users(
        self, client: AsyncClient, admin_headers: dict, auth_headers: dict
    ):
        await client.post(
            "/admin/categories",
            json={"name": "AI Tools", "icon": "smart_toy", "color": "#10A37F"},
            headers=admin_headers,
        )

        response = await client.get("/categories", headers=auth_headers)

        assert [c["name"] for c in response.json()] == ["AI Tools"]

    @pytest.mark.asyncio
    async def test_update_unknown(self, client: AsyncClient, admin_headers: dict):
        response = await client.patch(f"/admin/categories/{uuid4()}", json={"name": "X"}, headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_duplicate_default_name_conflicts(self, client: AsyncClient, admin_headers: dict):
        payload = {"name": "AI Tools", "icon": "smart_toy", "color": "#10A37F"}
        await client.post("/admin/categories", json=payload, headers=admin_headers)

        response = await client.post("/admin/categories", json=payload, headers=admin_headers)

        assert response.status_code == 409


class TestAdminTemplates:
    @pytest.mark.asyncio
    async def test_crud(self, client: AsyncClient, admin_headers: dict, seeded_categories: list[Category]):
        music = next(c for c in seeded_categories if c.name == "Music")

        response = await client.post(
            "/admin/subscriptions",
            json={"provider": "Tidal", "amount": 10.99, "currency": "usd", "categoryId": str(music.id)},
            headers=admin_headers,
        )
        assert response.status_code == 200
        template = response.json()
        assert template["isDefault"] is True
        assert template["userId"] is None
        assert template["currency"] == "USD"
        assert template["category"]["name"] == "Music"

        response = await client.patch(
            f"/admin/subscriptions/{template['id']}",
            json={"amount": 11.99, "categoryId": None},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["amount"] == 11.99
        assert response.json()["category"] is None

        response = await client.get("/admin/subscriptions", headers=admin_headers)
        assert [t["provider"] for t in response.json()] == ["Tidal"]

        response = await client.delete(f"/admin/subscriptions/{template['id']}", headers=admin_headers)
        assert response.json() == {"success": True}

        response = await client.delete(f"/admin/subscriptions/{template['id']}", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "RES_005"

    @pytest.mark.asyncio
    async def test_user_subscription_is_not_a_template(
        self, client: AsyncClient, admin_headers: dict, auth_headers: dict
    ):
        created = await client.post(
            "/subscriptions", json={"provider": "Netflix", "amount": 15.49}, headers=auth_headers
        )

        response = await client.delete(
            f"/admin/subscriptions/{created.json()['id']}", headers=admin_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["provider", "amount", "currency"])
    async def test_null_required_field_rejected(self, client: AsyncClient, admin_headers: dict, field: str):
        created = await client.post(
            "/admin/subscriptions", json={"provider": "Tidal", "amount": 10.99}, headers=admin_headers
        )

        response = await client.patch(
            f"/admin/subscriptions/{created.json()['id']}", json={field: None}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    @pytest.mark.asyncio
    async def test_custom_category_reference_dropped(
        self, client: AsyncClient, db_session: AsyncSession, admin_headers: dict, test_user: User
    ):
        private = await CategoryRepository(db_session).create(
            Category(name="Hobbies", icon="palette", color="#AA00AA", user_id=test_user.id)
        )
        private_id = str(private.id)

        created = await client.post(
            "/admin/subscriptions",
            json={"provider": "Tidal", "amount": 10.99, "categoryId": private_id},
            headers=admin_headers,
        )
        assert created.json()["categoryId"] is None

        response = await client.patch(
            f"/admin/subscriptions/{created.json()['id']}",
            json={"categoryId": private_id},
            headers=admin_headers,
        )
        assert response.json()["categoryId"] is None

    @pytest.mark.asyncio
    async def test_deleting_category_clears_template_reference(
        self, client: AsyncClient, admin_headers: dict, seeded_categories: list[Category]
    ):
        music_id = str(next(c for c in seeded_categories if c.name == "Music").id)
        await client.post(
            "/admin/subscriptions",
            json={"provider": "Tidal", "amount": 10.99, "categoryId": music_id},
            headers=admin_headers,
        )

        await client.delete(f"/admin/categories/{music_id}", headers=admin_headers)

        response = await client.get("/admin/subscriptions", headers=admin_headers)
        [template] = response.json()
        assert template["categoryId"] is None
        assert template["category"] is None


class TestAdminUpload:
    @pytest.mark.asyncio
    async def test_upload_image(self, client: AsyncClient, admin_headers: dict, tmp_path):
        response = await client.post(
            "/admin/upload",
            files={"file": ("logo.png", b"\x89PNG\r\n\x1a\n", "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["url"].startswith("http://test/uploads/")
        key = data["url"].split("/uploads/", 1)[1]
        assert (tmp_path / "uploads" / key).read_bytes() == b"\x89PNG\r\n\x1a\n"

    @pytest.mark.asyncio
    async def test_upload_rejects_non_image(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/admin/upload",
            files={"file": ("doc.pdf", b"%PDF-1.4", "application/pdf")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "UPL_002"

    @pytest.mark.asyncio
    async def test_upload_rejects_oversized(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/admin/upload",
            files={"file": ("big.png", b"0" * (5 * 1024 * 1024 + 1), "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "UPL_003"

    @pytest.mark.asyncio
    async def test_upload_without_file(self, client: AsyncClient, admin_headers: dict):
        response = await client.post("/admin/upload", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "UPL_001"

    @pytest.mark.asyncio
    async def test_upload_requires_admin(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/admin/upload",
            files={"file": ("logo.png", b"\x89PNG", "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 401


class TestAdminUsers:
    @pytest.mark.asyncio
    async def test_list_users(self, client: AsyncClient, admin_headers: dict, test_user: User, other_user: User):
        response = await client.get("/admin/users", headers=admin_headers)

        assert response.status_code == 200
        assert {u["id"] for u in response.json()} == {str(test_user.id), str(other_user.id)}

    @pytest.mark.asyncio
    async def test_delete_user_cascades(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin_headers: dict,
        other_user: User,
        identity_verifier: MockIdentityVerifier,
    ):
        user = await UserRepository(db_session).create(
            User(google_id="g-42", email="g42@example.com", display_name="G")
        )
        user_id = user.id
        custom = Category(name="Mine", icon="star", color="#FFFF00", user_id=user_id)
        db_session.add_all(
            [
                custom,
                Subscription(user_id=user_id, provider="Netflix", amount=15.49),
                UserPreferences(user_id=user_id, budget=100),
                DeviceToken(token="device-of-g42", user_id=user_id, platform="ios"),
                Subscription(user_id=other_user.id, provider="Hulu", amount=7.99),
            ]
        )
        await db_session.commit()
        other_user_id = other_user.id

        response = await client.delete(f"/admin/users/{user_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert identity_verifier.deleted == ["g-42"]

        assert await db_session.get(User, user_id) is None
        for model in (Subscription, UserPreferences, DeviceToken, Category):
            result = await db_session.execute(select(model).where(model.user_id == user_id))
            assert result.scalars().all() == []
        remaining = await db_session.execute(select(Subscription).where(Subscription.user_id == other_user_id))
        assert len(remaining.scalars().all()) == 1

        response = await client.delete(f"/admin/users/{user_id}", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "RES_004"

    @pytest.mark.asyncio
    async def test_identity_failure_does_not_block_deletion(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin_headers: dict,
        identity_verifier: MockIdentityVerifier,
    ):
        async def failing_delete(uid: str) -> None:
            raise RuntimeError("identity provider down")

        identity_verifier.delete_account = failing_delete
        user = await UserRepository(db_session).create(User(google_id="g-99"))
        user_id = user.id

        response = await client.delete(f"/admin/users/{user_id}", headers=admin_headers)

        assert response.status_code == 200
        assert await UserRepository(db_session).get_by_id(user_id) is None

    @pytest.mark.asyncio
    async def test_deleted_user_token_stops_working(
        self, client: AsyncClient, admin_headers: dict, test_user: User, auth_headers: dict
    ):
        await client.delete(f"/admin/users/{test_user.id}", headers=admin_headers)

        response = await client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 401
