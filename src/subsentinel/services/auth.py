"""Authentication service: phone OTP and identity-provider login."""

import logging

from sqlalchemy.exc import IntegrityError

from subsentinel.core.exceptions import UnauthorizedError
from subsentinel.core.security import create_user_token
from subsentinel.integrations.identity import IdentityClaims, IdentityVerifier
from subsentinel.integrations.otp import OTPProvider
from subsentinel.models.user import User
from subsentinel.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service for user authentication operations."""

    def __init__(
        self,
        user_repo: UserRepository,
        otp_provider: OTPProvider,
        identity_verifier: IdentityVerifier,
    ):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
            otp_provider: SMS verification backend
            identity_verifier: Identity-provider token verifier
        """
        self.user_repo = user_repo
        self.otp_provider = otp_provider
        self.identity_verifier = identity_verifier

    async def send_otp(self, phone: str) -> str:
        """
        Send a one-time code to a phone number.

        Args:
            phone: E.164 phone number

        Returns:
            Provider verification status

        Raises:
            UpstreamError: If the SMS provider call fails
        """
        status = await self.otp_provider.send(phone)
        logger.info("OTP requested", extra={"otp_status": status})
        return status

    async def verify_otp_and_login(self, phone: str, code: str) -> tuple[User, str]:
        """
        Check an OTP and log the phone's user in, creating it on first login.

        Args:
            phone: E.164 phone number
            code: Code received by SMS

        Returns:
            The user and a freshly signed user token

        Raises:
            UnauthorizedError: If the code is wrong or expired
            UpstreamError: If the SMS provider call fails
        """
        if not await self.otp_provider.check(phone, code):
            raise UnauthorizedError("OTP_001")

        user = await self.find_or_create_by_phone(phone)
        return user, create_user_token(user.id)

    async def login_with_google(self, id_token: str) -> tuple[User, str]:
        """
        Verify an identity-provider ID token and log its user in.

        Args:
            id_token: Firebase ID token from the client SDK

        Returns:
            The user and a freshly signed user token

        Raises:
            UnauthorizedError: If the ID token is invalid
        """
        claims = await self.identity_verifier.verify(id_token)
        user = await self.find_or_create_by_google(claims)
        return user, create_user_token(user.id)

    async def find_or_create_by_phone(self, phone: str) -> User:
        user = await self.user_repo.get_by_phone(phone)
        if user is not None:
            return user
        try:
            user = await self.user_repo.create(User(phone=phone))
        except IntegrityError:
            # Lost a race with a concurrent first login for the same phone.
            user = await self.user_repo.get_by_phone(phone)
            if user is None:
                raise
        logger.info("User created from phone login", extra={"user_id": str(user.id)})
        return user

    async def find_or_create_by_google(self, claims: IdentityClaims) -> User:
        user = await self.user_repo.get_by_google_id(claims.uid)
        if user is not None:
            return user
        try:
            user = await self.user_repo.create(
                User(
                    google_id=claims.uid,
                    email=claims.email.lower() if claims.email else None,
                    display_name=claims.name,
                    photo_url=claims.picture,
                )
            )
        except IntegrityError:
            user = await self.user_repo.get_by_google_id(claims.uid)
            if user is None:
                raise
        logger.info("User created from identity-provider login", extra={"user_id": str(user.id)})
        return user
