"""Checkout session service."""
import logging

from subsentinel.integrations.payments import CheckoutProvider

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, checkout: CheckoutProvider):
        self.checkout = checkout

    async def create_checkout_session(self, product_id: str, email: str, name: str) -> str:
        """Create a hosted checkout session and return its URL.

        Raises:
            UpstreamError: If the provider call fails or returns no URL
        """
        logger.info("Creating checkout session", extra={"product_id": product_id})
        url = await self.checkout.create_session(product_id, email, name)
        logger.info("Checkout session created", extra={"product_id": product_id})
        return url
