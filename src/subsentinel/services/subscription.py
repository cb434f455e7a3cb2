"""Subscription lifecycle and dashboard aggregation."""

import logging
import math
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.config import settings
from subsentinel.core.exceptions import NotFoundError
from subsentinel.models.subscription import Subscription, SubscriptionStatus
from subsentinel.repositories.category import CategoryRepository
from subsentinel.repositories.subscription import SubscriptionRepository
from subsentinel.repositories.user import UserRepository
from subsentinel.schemas.subscription import RenewalInfo, SubscriptionCreate, SubscriptionSummary

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite drops tzinfo) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def summarize_subscriptions(
    active: list[Subscription],
    total_count: int,
    now: datetime,
    window_days: int = 7,
    currency: str = "USD",
) -> SubscriptionSummary:
    """Build the dashboard summary from a user's active subscriptions.

    Amounts are summed as raw numbers whatever their currency; the summary is
    always labelled with ``currency``. A subscription renews soon when its
    next billing date lies in ``[now, now + window_days]``, both ends included.

    Args:
        active: The user's subscriptions with status ``active``
        total_count: Number of the user's subscriptions in any status
        now: Reference instant for the renewal window
        window_days: Size of the renewal window
        currency: Label for the summary

    Returns:
        Summary with total burn, counts and the renewals inside the window
    """
    now = as_utc(now)
    window_end = now + timedelta(days=window_days)

    renewing: list[tuple[datetime, RenewalInfo]] = []
    for sub in active:
        if sub.next_billing is None:
            continue
        billing = as_utc(sub.next_billing)
        if now <= billing <= window_end:
            days_left = math.ceil((billing - now).total_seconds() / SECONDS_PER_DAY)
            renewing.append(
                (billing, RenewalInfo(id=sub.id, name=sub.provider, amount=sub.amount, days_left=days_left))
            )
    renewing.sort(key=lambda item: item[0])

    return SubscriptionSummary(
        total_burn=sum(sub.amount for sub in active),
        active_count=len(active),
        total_count=total_count,
        renewing_soon=[info for _, info in renewing],
        currency=currency,
    )


class SubscriptionService:
    """Service layer for a user's subscription ledger.

    Every lookup is scoped to the calling user; a record owned by someone else
    is reported exactly like a missing one.
    """

    def __init__(self, db: AsyncSession):
        """Initialize subscription service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.subscription_repo = SubscriptionRepository(db)
        self.category_repo = CategoryRepository(db)
        self.user_repo = UserRepository(db)

    async def create(self, data: SubscriptionCreate, user_id: UUID) -> Subscription:
        """Create a subscription owned by ``user_id``.

        Args:
            data: Validated request body
            user_id: Owner

        Returns:
            The created subscription with its category loaded

        Raises:
            NotFoundError: If the user does not exist
        """
        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("RES_004")

        category_id = await self.category_repo.resolve_reference(data.category_id, user_id)
        if data.category_id and category_id is None:
            logger.info("Dropping unusable category reference", extra={"user_id": str(user_id)})

        subscription = await self.subscription_repo.create(
            Subscription(
                user_id=user_id,
                provider=data.provider,
                amount=data.amount,
                currency=data.currency,
                next_billing=data.next_billing,
                status=data.status,
                category_id=category_id,
                logo_url=data.logo_url,
                is_default=False,
            )
        )
        return await self.subscription_repo.reload(subscription.id)

    async def list_for_user(self, user_id: UUID) -> list[Subscription]:
        """All of the user's subscriptions by ascending next billing date."""
        return await self.subscription_repo.get_all_by_user(user_id)

    async def list_templates(self) -> list[Subscription]:
        return await self.subscription_repo.get_templates()

    async def summary(self, user_id: UUID, now: datetime | None = None) -> SubscriptionSummary:
        """Recompute the dashboard summary for one user."""
        active = await self.subscription_repo.get_active_by_user(user_id)
        total_count = await self.subscription_repo.count_by_user(user_id)
        return summarize_subscriptions(
            active,
            total_count,
            now or datetime.now(timezone.utc),
            window_days=settings.renewal_window_days,
            currency=settings.summary_currency,
        )

    async def update_status(
        self, subscription_id: UUID, status: SubscriptionStatus, user_id: UUID
    ) -> Subscription | None:
        """Set the status of a subscription the user owns.

        Any status may follow any other; setting the current status is a no-op.

        Returns:
            The updated subscription, or None if not found or not owned
        """
        subscription = await self.subscription_repo.get_by_user(user_id, subscription_id)
        if subscription is None:
            return None
        if subscription.status != status:
            await self.subscription_repo.apply(subscription, {"status": status})
        return await self.subscription_repo.reload(subscription.id)

    async def delete(self, subscription_id: UUID, user_id: UUID) -> bool:
        """Delete a subscription the user owns.

        Returns:
            True if a record was removed
        """
        subscription = await self.subscription_repo.get_by_user(user_id, subscription_id)
        if subscription is None:
            return False
        return await self.subscription_repo.delete(subscription.id)
