"""Subscription ledger endpoints, scoped to the authenticated user."""

from uuid import UUID

from fastapi import APIRouter, Depends

from subsentinel.api.deps import get_current_user, get_subscription_service
from subsentinel.core.exceptions import NotFoundError
from subsentinel.models.user import User
from subsentinel.schemas.common import SuccessResponse
from subsentinel.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionResponse,
    SubscriptionStatusUpdate,
    SubscriptionSummary,
)
from subsentinel.services.subscription import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get(
    "",
    response_model=list[SubscriptionResponse],
    summary="List user's subscriptions",
    description="""
    Get all subscriptions owned by the authenticated user, ordered by next
    billing date (soonest first). Subscriptions without a billing date come last.
    """,
)
async def list_subscriptions(
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> list[SubscriptionResponse]:
    subscriptions = await service.list_for_user(current_user.id)
    return [SubscriptionResponse.model_validate(s) for s in subscriptions]


@router.get(
    "/summary",
    response_model=SubscriptionSummary,
    summary="Dashboard summary",
    description="""
    Aggregate the user's subscriptions for the dashboard:

    - **totalBurn**: sum of active subscription amounts (no currency conversion)
    - **activeCount** / **totalCount**: active and all subscriptions
    - **renewingSoon**: active subscriptions billing within the next 7 days
    """,
)
async def get_summary(
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionSummary:
    return await service.summary(current_user.id)


@router.get(
    "/templates",
    response_model=list[SubscriptionResponse],
    summary="List subscription templates",
    description="Admin-managed templates clients use to pre-fill the create form.",
)
async def list_templates(
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> list[SubscriptionResponse]:
    templates = await service.list_templates()
    return [SubscriptionResponse.model_validate(t) for t in templates]


@router.post(
    "",
    response_model=SubscriptionResponse,
    summary="Create subscription",
)
async def create_subscription(
    data: SubscriptionCreate,
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    """
    Create a subscription for the authenticated user.

    Status defaults to ``active`` and currency to ``USD``. A ``categoryId``
    that does not resolve to a usable category is ignored.

    Args:
        data: Subscription fields
        current_user: Authenticated user
        service: Subscription service

    Returns:
        Created subscription with its category resolved
    """
    subscription = await service.create(data, current_user.id)
    return SubscriptionResponse.model_validate(subscription)


@router.patch(
    "/{subscription_id}/status",
    response_model=SubscriptionResponse,
    summary="Update subscription status",
    description="Pause, resume or cancel a subscription.",
    responses={404: {"description": "Subscription not found"}},
)
async def update_subscription_status(
    subscription_id: UUID,
    data: SubscriptionStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    """
    Update a subscription's status.

    Raises:
        404: Subscription does not exist or belongs to another user
    """
    subscription = await service.update_status(subscription_id, data.status, current_user.id)
    if subscription is None:
        raise NotFoundError("RES_001")
    return SubscriptionResponse.model_validate(subscription)


@router.delete(
    "/{subscription_id}",
    response_model=SuccessResponse,
    summary="Delete subscription",
    responses={404: {"description": "Subscription not found"}},
)
async def delete_subscription(
    subscription_id: UUID,
    current_user: User = Depends(get_current_user),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SuccessResponse:
    if not await service.delete(subscription_id, current_user.id):
        raise NotFoundError("RES_001")
    return SuccessResponse(success=True)
