"""Category service: defaults plus per-user custom categories."""
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.category import Category
from subsentinel.repositories.category import CategoryRepository
from subsentinel.schemas.category import CategoryCreate, CategoryUpdate


class CategoryService:
    """Service layer for category operations.

    Users may create categories, and update or delete the ones they own.
    Defaults are read-only here; the admin service manages them.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.category_repo = CategoryRepository(db)

    async def list_for_user(self, user_id: UUID) -> list[Category]:
        """Defaults first, then the user's own categories, each alphabetically."""
        return await self.category_repo.get_visible_to_user(user_id)

    async def create(self, data: CategoryCreate, user_id: UUID) -> Category:
        """Create a custom category.

        Raises:
            IntegrityError: If the user already has a category with this name
        """
        return await self.category_repo.create(
            Category(**data.model_dump(), is_default=False, user_id=user_id)
        )

    async def update(self, category_id: UUID, data: CategoryUpdate, user_id: UUID) -> Category | None:
        """Update a custom category the user owns, or return None."""
        category = await self.category_repo.get_owned(user_id, category_id)
        if category is None:
            return None
        return await self.category_repo.apply(category, data.model_dump(exclude_unset=True))

    async def delete(self, category_id: UUID, user_id: UUID) -> bool:
        category = await self.category_repo.get_owned(user_id, category_id)
        if category is None:
            return False
        return await self.category_repo.delete(category.id)
