"""Device token repository."""
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.device_token import DeviceToken
from subsentinel.repositories.base import BaseRepository


class DeviceTokenRepository(BaseRepository[DeviceToken]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, DeviceToken)

    async def get_by_token(self, token: str) -> DeviceToken | None:
        result = await self.db.execute(select(DeviceToken).where(DeviceToken.token == token))
        return result.scalar_one_or_none()

    async def get_all_by_user(self, user_id: UUID) -> list[DeviceToken]:
        result = await self.db.execute(
            select(DeviceToken)
            .where(DeviceToken.user_id == user_id)
            .order_by(DeviceToken.created_at.asc())
        )
        return list(result.scalars().all())

    async def upsert(self, token: str, user_id: UUID | None, platform: str) -> DeviceToken:
        """Register a token, reassigning owner and platform if it already exists."""
        existing = await self.get_by_token(token)
        if existing is None:
            return await self.create(DeviceToken(token=token, user_id=user_id, platform=platform))
        return await self.apply(existing, {"user_id": user_id, "platform": platform})

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete a user's device tokens without committing."""
        result = await self.db.execute(delete(DeviceToken).where(DeviceToken.user_id == user_id))
        return result.rowcount or 0
