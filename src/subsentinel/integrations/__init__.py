"""External collaborators, selected once at startup from settings."""

from dataclasses import dataclass

from subsentinel.config import Settings
from subsentinel.integrations.identity import (
    FirebaseIdentityVerifier,
    IdentityVerifier,
    MockIdentityVerifier,
)
from subsentinel.integrations.otp import MockOTPProvider, OTPProvider, TwilioVerifyProvider
from subsentinel.integrations.payments import (
    CheckoutProvider,
    DodoPaymentsCheckoutProvider,
    MockCheckoutProvider,
)
from subsentinel.integrations.storage import BlobStore, LocalBlobStore


@dataclass
class Providers:
    otp: OTPProvider
    identity: IdentityVerifier
    checkout: CheckoutProvider
    blobs: BlobStore


def build_providers(settings: Settings) -> Providers:
    """Pick the real or mock implementation of each collaborator."""
    if settings.otp_provider == "twilio":
        otp: OTPProvider = TwilioVerifyProvider(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            settings.twilio_verify_service_sid,
        )
    else:
        otp = MockOTPProvider(settings.mock_otp_code)

    if settings.identity_provider == "firebase":
        identity: IdentityVerifier = FirebaseIdentityVerifier(
            settings.firebase_project_id,
            settings.firebase_client_email,
            settings.firebase_private_key,
        )
    else:
        identity = MockIdentityVerifier()

    if settings.payment_provider == "dodo":
        checkout: CheckoutProvider = DodoPaymentsCheckoutProvider(
            settings.dodo_payments_api_key,
            settings.dodo_payments_environment,
            settings.checkout_return_url,
        )
    else:
        checkout = MockCheckoutProvider()

    blobs = LocalBlobStore(settings.upload_dir, settings.public_base_url)
    return Providers(otp=otp, identity=identity, checkout=checkout, blobs=blobs)


__all__ = [
    "BlobStore",
    "CheckoutProvider",
    "IdentityVerifier",
    "OTPProvider",
    "Providers",
    "build_providers",
]
