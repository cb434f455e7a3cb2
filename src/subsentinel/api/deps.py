"""FastAPI dependency injection for authentication, database and providers."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from subsentinel.core.exceptions import UnauthorizedError
from subsentinel.core.security import get_admin_id_from_token, get_user_id_from_token
from subsentinel.db.session import get_db
from subsentinel.integrations import Providers
from subsentinel.integrations.identity import IdentityVerifier
from subsentinel.integrations.otp import OTPProvider
from subsentinel.integrations.payments import CheckoutProvider
from subsentinel.integrations.storage import BlobStore
from subsentinel.models.admin import Admin
from subsentinel.models.user import User
from subsentinel.repositories.admin import AdminRepository
from subsentinel.repositories.user import UserRepository
from subsentinel.services.admin import AdminService
from subsentinel.services.auth import AuthService
from subsentinel.services.category import CategoryService
from subsentinel.services.device import DeviceService
from subsentinel.services.payment import PaymentService
from subsentinel.services.preferences import PreferencesService
from subsentinel.services.subscription import SubscriptionService
from subsentinel.services.user import UserService

# Bearer token scheme; missing headers are reported by get_current_* as 401.
security = HTTPBearer(auto_error=False)


# Providers (selected in create_app, overridable in tests)


def get_providers(request: Request) -> Providers:
    return request.app.state.providers


def get_otp_provider(providers: Providers = Depends(get_providers)) -> OTPProvider:
    return providers.otp


def get_identity_verifier(providers: Providers = Depends(get_providers)) -> IdentityVerifier:
    return providers.identity


def get_checkout_provider(providers: Providers = Depends(get_providers)) -> CheckoutProvider:
    return providers.checkout


def get_blob_store(providers: Providers = Depends(get_providers)) -> BlobStore:
    return providers.blobs


# Repositories and services


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    """
    Get user repository instance.

    Args:
        db: Database session

    Returns:
        UserRepository instance
    """
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    otp_provider: OTPProvider = Depends(get_otp_provider),
    identity_verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository
        otp_provider: SMS verification backend
        identity_verifier: Identity-provider token verifier

    Returns:
        AuthService instance
    """
    return AuthService(user_repo, otp_provider, identity_verifier)


async def get_subscription_service(db: AsyncSession = Depends(get_db)) -> SubscriptionService:
    return SubscriptionService(db)


async def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


async def get_preferences_service(db: AsyncSession = Depends(get_db)) -> PreferencesService:
    return PreferencesService(db)


async def get_device_service(db: AsyncSession = Depends(get_db)) -> DeviceService:
    return DeviceService(db)


async def get_payment_service(
    checkout: CheckoutProvider = Depends(get_checkout_provider),
) -> PaymentService:
    return PaymentService(checkout)


async def get_admin_service(db: AsyncSession = Depends(get_db)) -> AdminService:
    return AdminService(db)


async def get_user_service(
    db: AsyncSession = Depends(get_db),
    identity_verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> UserService:
    return UserService(db, identity_verifier)


# Authentication


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("AUTH_002")
    return credentials.credentials


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Extract and validate user from a user JWT.

    Args:
        request: Incoming request (the user id is attached for logging)
        credentials: HTTP bearer token credentials
        user_repo: User repository for database queries

    Returns:
        Authenticated user object

    Raises:
        UnauthorizedError: If token is missing, invalid, expired, meant for
            the admin panel, or the user no longer exists
    """
    token = _bearer_token(credentials)
    try:
        user_id = get_user_id_from_token(token)
    except (JWTError, ValueError):
        raise UnauthorizedError("AUTH_003")

    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("AUTH_003")

    request.state.user_id = str(user.id)
    return user


async def get_current_admin(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: AsyncSession = Depends(get_db),
) -> Admin:
    """
    Extract and validate admin from an admin JWT.

    Raises:
        UnauthorizedError: If token is missing, invalid, expired, a user
            token, or the admin no longer exists
    """
    token = _bearer_token(credentials)
    try:
        admin_id = get_admin_id_from_token(token)
    except (JWTError, ValueError):
        raise UnauthorizedError("AUTH_003")

    admin = await AdminRepository(db).get_by_id(admin_id)
    if admin is None:
        raise UnauthorizedError("AUTH_003")

    request.state.admin_id = str(admin.id)
    return admin
