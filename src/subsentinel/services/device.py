"""Push-notification device registry."""
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.models.device_token import DeviceToken
from subsentinel.repositories.device_token import DeviceTokenRepository

logger = logging.getLogger(__name__)


class DeviceService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.device_repo = DeviceTokenRepository(db)

    async def register(self, token: str, platform: str, user_id: UUID) -> DeviceToken:
        """Upsert by token; re-registering moves the token to ``user_id``."""
        device = await self.device_repo.upsert(token, user_id, platform)
        logger.info(
            "Device registered",
            extra={"user_id": str(user_id), "platform": platform},
        )
        return device

    async def list_for_user(self, user_id: UUID) -> list[DeviceToken]:
        return await self.device_repo.get_all_by_user(user_id)

    async def unregister(self, token: str, user_id: UUID) -> bool:
        """Remove a token the user owns."""
        device = await self.device_repo.get_by_token(token)
        if device is None or device.user_id != user_id:
            return False
        return await self.device_repo.delete(device.id)
