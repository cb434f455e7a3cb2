"""Checkout session endpoint."""

from fastapi import APIRouter, Depends

from subsentinel.api.deps import get_current_user, get_payment_service
from subsentinel.models.user import User
from subsentinel.schemas.payment import CheckoutRequest, CheckoutResponse
from subsentinel.services.payment import PaymentService

router = APIRouter(prefix="/checkout", tags=["payments"])


@router.post(
    "",
    response_model=CheckoutResponse,
    summary="Create checkout session",
    description="Create a hosted checkout session for one product and return its URL.",
)
async def create_checkout(
    data: CheckoutRequest,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
) -> CheckoutResponse:
    """
    Create a checkout session.

    Raises:
        500: Payment provider failure or no checkout URL returned
    """
    url = await service.create_checkout_session(data.product_id, data.email, data.name)
    return CheckoutResponse(url=url)
