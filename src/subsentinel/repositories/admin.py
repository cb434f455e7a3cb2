"""Admin account repository."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.admin import Admin
from subsentinel.repositories.base import BaseRepository


class AdminRepository(BaseRepository[Admin]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Admin)

    async def get_by_username(self, username: str) -> Admin | None:
        """Usernames are stored lowercased; callers pass the normalised form."""
        result = await self.db.execute(select(Admin).where(Admin.username == username))
        return result.scalar_one_or_none()
