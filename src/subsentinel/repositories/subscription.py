"""Subscription repository with user-scoped security."""
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from subsentinel.models.subscription import Subscription, SubscriptionStatus
from subsentinel.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for Subscription model.

    Every user-facing query filters on ``user_id`` so one user can never read
    or mutate another user's records.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, Subscription)

    async def reload(self, subscription_id: UUID) -> Subscription | None:
        """Re-read a record with its category populated."""
        result = await self.db.execute(
            select(Subscription)
            .options(selectinload(Subscription.category))
            .where(Subscription.id == subscription_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_user(self, user_id: UUID, subscription_id: UUID) -> Subscription | None:
        """Get subscription only if it belongs to the specified user."""
        result = await self.db.execute(
            select(Subscription).where(
                Subscription.id == subscription_id,
                Subscription.user_id == user_id,
                Subscription.is_default.is_(False),
            )
        )
        return result.scalar_one_or_none()

    async def get_all_by_user(self, user_id: UUID) -> list[Subscription]:
        """All of a user's subscriptions by next billing date, undated last."""
        result = await self.db.execute(
            select(Subscription)
            .where(Subscription.user_id == user_id, Subscription.is_default.is_(False))
            .order_by(Subscription.next_billing.asc().nulls_last(), Subscription.created_at.asc())
            .options(selectinload(Subscription.category))
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_active_by_user(self, user_id: UUID) -> list[Subscription]:
        result = await self.db.execute(
            select(Subscription).where(
                Subscription.user_id == user_id,
                Subscription.is_default.is_(False),
                Subscription.status == SubscriptionStatus.ACTIVE,
            )
        )
        return list(result.scalars().all())

    async def count_by_user(self, user_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Subscription)
            .where(Subscription.user_id == user_id, Subscription.is_default.is_(False))
        )
        return result.scalar() or 0

    async def get_templates(self) -> list[Subscription]:
        """Admin-managed templates, alphabetically."""
        result = await self.db.execute(
            select(Subscription)
            .where(Subscription.is_default.is_(True))
            .order_by(Subscription.provider.asc())
            .options(selectinload(Subscription.category))
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_template(self, template_id: UUID) -> Subscription | None:
        result = await self.db.execute(
            select(Subscription).where(
                Subscription.id == template_id, Subscription.is_default.is_(True)
            )
        )
        return result.scalar_one_or_none()

    async def count_templates(self) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Subscription)
            .where(Subscription.is_default.is_(True))
        )
        return result.scalar() or 0

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete every subscription a user owns without committing."""
        result = await self.db.execute(
            delete(Subscription).where(Subscription.user_id == user_id)
        )
        return result.rowcount or 0
