"""User administration, including cascading account deletion."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.integrations.identity import IdentityVerifier
from subsentinel.models.user import User
from subsentinel.repositories.category import CategoryRepository
from subsentinel.repositories.device_token import DeviceTokenRepository
from subsentinel.repositories.preferences import PreferencesRepository
from subsentinel.repositories.subscription import SubscriptionRepository
from subsentinel.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: AsyncSession, identity_verifier: IdentityVerifier):
        self.db = db
        self.identity_verifier = identity_verifier
        self.user_repo = UserRepository(db)
        self.preferences_repo = PreferencesRepository(db)
        self.device_repo = DeviceTokenRepository(db)
        self.subscription_repo = SubscriptionRepository(db)
        self.category_repo = CategoryRepository(db)

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[User]:
        return await self.user_repo.list_recent(skip, limit)

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user and everything they own.

        Dependent rows go first (preferences, devices, subscriptions, custom
        categories), then the user row, all in one database transaction. The
        identity-provider account is deleted best-effort before commit; a
        failure there is logged and does not stop the deletion. Calling again
        for the same id returns False.

        Returns:
            True if the user existed and was deleted
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            return False

        try:
            counts = {
                "preferences": await self.preferences_repo.delete_for_user(user_id),
                "devices": await self.device_repo.delete_for_user(user_id),
                "subscriptions": await self.subscription_repo.delete_for_user(user_id),
                "categories": await self.category_repo.delete_custom_for_user(user_id),
            }

            if user.google_id:
                try:
                    await self.identity_verifier.delete_account(user.google_id)
                except Exception:
                    logger.warning(
                        "Identity-provider account deletion failed",
                        extra={"user_id": str(user_id)},
                        exc_info=True,
                    )

            await self.db.delete(user)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info("User deleted", extra={"user_id": str(user_id), **counts})
        return True
