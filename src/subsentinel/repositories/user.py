"""User repository for identity lookups."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.user import User
from subsentinel.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with identity-key queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_phone(self, phone: str) -> User | None:
        """Find user by phone number (OTP login)."""
        result = await self.db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()

    async def get_by_google_id(self, google_id: str) -> User | None:
        """Find user by identity-provider uid."""
        result = await self.db.execute(select(User).where(User.google_id == google_id))
        return result.scalar_one_or_none()

    async def list_recent(self, skip: int = 0, limit: int = 100) -> list[User]:
        """Get users, newest first."""
        result = await self.db.execute(
            select(User).order_by(User.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())
