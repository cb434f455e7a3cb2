"""User preferences repository (one record per user)."""
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.preferences import UserPreferences
from subsentinel.repositories.base import BaseRepository


class PreferencesRepository(BaseRepository[UserPreferences]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, UserPreferences)

    async def get_by_user(self, user_id: UUID) -> UserPreferences | None:
        result = await self.db.execute(
            select(UserPreferences).where(UserPreferences.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(self, user_id: UUID, data: dict) -> UserPreferences:
        """Create the user's record or update the existing one in place."""
        existing = await self.get_by_user(user_id)
        if existing is None:
            return await self.create(UserPreferences(user_id=user_id, **data))
        return await self.apply(existing, data)

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete a user's preferences without committing."""
        result = await self.db.execute(
            delete(UserPreferences).where(UserPreferences.user_id == user_id)
        )
        return result.rowcount or 0
