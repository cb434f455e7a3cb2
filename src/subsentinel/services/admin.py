"""Admin panel: operator login and shared catalog management."""

import logging
from functools import lru_cache
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.core.exceptions import UnauthorizedError
from subsentinel.core.security import create_admin_token, hash_password, verify_password
from subsentinel.models.admin import Admin
from subsentinel.models.category import Category
from subsentinel.models.subscription import Subscription
from subsentinel.repositories.admin import AdminRepository
from subsentinel.repositories.category import CategoryRepository
from subsentinel.repositories.subscription import SubscriptionRepository
from subsentinel.schemas.category import CategoryCreate, CategoryUpdate
from subsentinel.schemas.subscription import TemplateCreate, TemplateUpdate

logger = logging.getLogger(__name__)


@lru_cache
def _dummy_hash() -> str:
    # Verified against when the username is unknown so both failure paths cost the same.
    return hash_password("subsentinel-dummy-password")


def normalize_username(username: str) -> str:
    return username.strip().lower()


class AdminService:
    """Service layer for admin operations.

    Admin operations bypass per-user ownership and work on default categories
    and subscription templates directly.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.admin_repo = AdminRepository(db)
        self.category_repo = CategoryRepository(db)
        self.subscription_repo = SubscriptionRepository(db)

    async def login(self, username: str, password: str) -> tuple[Admin, str]:
        """
        Authenticate an admin.

        Unknown usernames and wrong passwords fail identically.

        Returns:
            The admin and a signed admin token

        Raises:
            UnauthorizedError: If the credentials do not match
        """
        admin = await self.admin_repo.get_by_username(normalize_username(username))
        if admin is None:
            verify_password(password, _dummy_hash())
            raise UnauthorizedError("AUTH_001")

        if not verify_password(password, admin.password_hash):
            raise UnauthorizedError("AUTH_001")

        logger.info("Admin logged in", extra={"admin_id": str(admin.id)})
        return admin, create_admin_token(admin.id)

    # Categories

    async def list_categories(self) -> list[Category]:
        return await self.category_repo.get_all_sorted()

    async def create_category(self, data: CategoryCreate) -> Category:
        return await self.category_repo.create(
            Category(**data.model_dump(), is_default=True, user_id=None)
        )

    async def update_category(self, category_id: UUID, data: CategoryUpdate) -> Category | None:
        return await self.category_repo.update(category_id, data.model_dump(exclude_unset=True))

    async def delete_category(self, category_id: UUID) -> bool:
        return await self.category_repo.delete(category_id)

    # Subscription templates

    async def list_templates(self) -> list[Subscription]:
        return await self.subscription_repo.get_templates()

    async def create_template(self, data: TemplateCreate) -> Subscription:
        template = await self.subscription_repo.create(
            Subscription(
                provider=data.provider,
                amount=data.amount,
                currency=data.currency.upper(),
                category_id=await self.category_repo.resolve_reference(
                    data.category_id, defaults_only=True
                ),
                logo_url=data.logo_url,
                is_default=True,
                user_id=None,
            )
        )
        return await self.subscription_repo.reload(template.id)

    async def update_template(self, template_id: UUID, data: TemplateUpdate) -> Subscription | None:
        template = await self.subscription_repo.get_template(template_id)
        if template is None:
            return None

        changes = data.model_dump(exclude_unset=True)
        if "category_id" in changes:
            changes["category_id"] = await self.category_repo.resolve_reference(
                changes["category_id"], defaults_only=True
            )
        if changes.get("currency"):
            changes["currency"] = changes["currency"].upper()

        await self.subscription_repo.apply(template, changes)
        return await self.subscription_repo.reload(template.id)

    async def delete_template(self, template_id: UUID) -> bool:
        template = await self.subscription_repo.get_template(template_id)
        if template is None:
            return False
        return await self.subscription_repo.delete(template.id)
