"""Category repository with owner-scoped queries."""
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.category import Category
from subsentinel.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category model.

    Regular users see defaults plus their own entries, and may only touch
    their own non-default entries.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, Category)

    async def get_visible_to_user(self, user_id: UUID) -> list[Category]:
        """Defaults first, then alphabetically."""
        result = await self.db.execute(
            select(Category)
            .where(or_(Category.is_default.is_(True), Category.user_id == user_id))
            .order_by(Category.is_default.desc(), Category.name.asc())
        )
        return list(result.scalars().all())

    async def get_all_sorted(self) -> list[Category]:
        """Every category, defaults first then alphabetically (admin view)."""
        result = await self.db.execute(
            select(Category).order_by(Category.is_default.desc(), Category.name.asc())
        )
        return list(result.scalars().all())

    async def get_owned(self, user_id: UUID, category_id: UUID) -> Category | None:
        """Get a custom category only if the user owns it."""
        result = await self.db.execute(
            select(Category).where(
                Category.id == category_id,
                Category.user_id == user_id,
                Category.is_default.is_(False),
            )
        )
        return result.scalar_one_or_none()

    async def resolve_reference(
        self, raw_id: str | None, user_id: UUID | None = None, defaults_only: bool = False
    ) -> UUID | None:
        """Resolve a client-supplied category id, or None if it is unusable.

        Malformed ids, unknown ids and other users' custom categories all
        resolve to None so the caller can drop the reference silently. With
        ``defaults_only`` every custom category is unusable.
        """
        if not raw_id:
            return None
        try:
            category_id = UUID(str(raw_id))
        except ValueError:
            return None

        category = await self.get_by_id(category_id)
        if category is None:
            return None
        if defaults_only and not category.is_default:
            return None
        if user_id is not None and not category.is_default and category.user_id != user_id:
            return None
        return category.id

    async def get_defaults(self) -> list[Category]:
        result = await self.db.execute(select(Category).where(Category.is_default.is_(True)))
        return list(result.scalars().all())

    async def count_defaults(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Category).where(Category.is_default.is_(True))
        )
        return result.scalar() or 0

    async def delete_custom_for_user(self, user_id: UUID) -> int:
        """Delete a user's custom categories without committing."""
        result = await self.db.execute(
            delete(Category).where(Category.user_id == user_id, Category.is_default.is_(False))
        )
        return result.rowcount or 0
