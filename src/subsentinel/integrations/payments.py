"""Hosted checkout session providers."""

import logging
import uuid
from typing import Protocol

import httpx

from subsentinel.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

DODO_BASE_URLS = {
    "test_mode": "https://test.dodopayments.com",
    "live_mode": "https://live.dodopayments.com",
}


class CheckoutProvider(Protocol):
    async def create_session(self, product_id: str, email: str, name: str) -> str:
        """Create a one-item checkout session and return its hosted URL."""
        ...


class MockCheckoutProvider:
    def __init__(self, base_url: str = "https://checkout.mock.local"):
        self.base_url = base_url.rstrip("/")

    async def create_session(self, product_id: str, email: str, name: str) -> str:
        return f"{self.base_url}/session/{uuid.uuid4()}?product={product_id}"


class DodoPaymentsCheckoutProvider:
    """Dodo Payments checkout sessions over the REST API."""

    def __init__(
        self,
        api_key: str,
        environment: str = "test_mode",
        return_url: str = "subsentinel://payment-success",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = DODO_BASE_URLS[environment]
        self.return_url = return_url
        self.transport = transport

    async def create_session(self, product_id: str, email: str, name: str) -> str:
        payload = {
            "product_cart": [{"product_id": product_id, "quantity": 1}],
            "customer": {"email": email, "name": name},
            "return_url": self.return_url,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=15.0,
                transport=self.transport,
            ) as client:
                response = await client.post("/checkouts", json=payload)
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Checkout session request failed", extra={"error_type": type(exc).__name__})
            raise UpstreamError("UPS_003") from exc

        checkout_url = body.get("checkout_url")
        if not checkout_url:
            raise UpstreamError(
                "UPS_003", message="Failed to create checkout session: No checkout URL returned"
            )
        return checkout_url
