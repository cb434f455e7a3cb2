"""SMS one-time-password verification providers.

Two interchangeable implementations of ``OTPProvider``: Twilio Verify over its
REST API, and a mock that accepts a fixed code for local development.
"""

import logging
from typing import Protocol

import httpx

from subsentinel.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

TWILIO_VERIFY_BASE = "https://verify.twilio.com/v2"


class OTPProvider(Protocol):
    """Protocol for SMS verification backends."""

    async def send(self, phone: str) -> str:
        """Start a verification; returns the provider status (e.g. 'pending')."""
        ...

    async def check(self, phone: str, code: str) -> bool:
        """Return True when ``code`` is the valid pending code for ``phone``."""
        ...


class MockOTPProvider:
    """Accepts a single fixed code; never sends an SMS."""

    def __init__(self, code: str = "123456"):
        self.code = code

    async def send(self, phone: str) -> str:
        logger.info("[MOCK] Sending OTP", extra={"phone": phone})
        return "pending"

    async def check(self, phone: str, code: str) -> bool:
        logger.info("[MOCK] Verifying OTP", extra={"phone": phone})
        return code == self.code


class TwilioVerifyProvider:
    """Twilio Verify v2 client.

    Args:
        account_sid: Twilio account SID (basic-auth user)
        auth_token: Twilio auth token (basic-auth password)
        service_sid: Verify service SID
        transport: Optional httpx transport (tests)
    """

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        service_sid: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.service_sid = service_sid
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{TWILIO_VERIFY_BASE}/Services/{self.service_sid}",
            auth=(self.account_sid, self.auth_token),
            timeout=10.0,
            transport=self.transport,
        )

    async def send(self, phone: str) -> str:
        try:
            async with self._client() as client:
                response = await client.post("/Verifications", data={"To": phone, "Channel": "sms"})
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Twilio send failed", extra={"error_type": type(exc).__name__})
            raise UpstreamError("UPS_001") from exc
        return body.get("status", "pending")

    async def check(self, phone: str, code: str) -> bool:
        try:
            async with self._client() as client:
                response = await client.post("/VerificationCheck", data={"To": phone, "Code": code})
                # No pending verification (expired, already used, never sent).
                if response.status_code == 404:
                    return False
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Twilio verify failed", extra={"error_type": type(exc).__name__})
            raise UpstreamError("UPS_002") from exc
        return body.get("status") == "approved"
