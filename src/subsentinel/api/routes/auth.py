"""Authentication endpoints: phone OTP and identity-provider login."""

from fastapi import APIRouter, Depends

from subsentinel.api.deps import get_auth_service, get_current_user
from subsentinel.models.user import User
from subsentinel.schemas.auth import (
    AuthResponse,
    GoogleLoginRequest,
    OTPSendRequest,
    OTPSendResponse,
    OTPVerifyRequest,
    UserResponse,
)
from subsentinel.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/otp/send",
    response_model=OTPSendResponse,
    summary="Send OTP",
    description="Send a one-time verification code by SMS.",
)
async def send_otp(
    data: OTPSendRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> OTPSendResponse:
    """
    Send an OTP to a phone number.

    Args:
        data: Phone number in E.164 format
        auth_service: Authentication service

    Returns:
        Success acknowledgement

    Raises:
        400: Invalid phone number
        500: SMS provider failure
    """
    await auth_service.send_otp(data.phone)
    return OTPSendResponse(success=True, message="OTP sent")


@router.post(
    "/otp/verify",
    response_model=AuthResponse,
    summary="Verify OTP and log in",
    description="Verify the SMS code; creates the user on first login.",
)
async def verify_otp(
    data: OTPVerifyRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Verify an OTP and return a user token.

    Raises:
        401: Invalid or expired code
    """
    user, token = await auth_service.verify_otp_and_login(data.phone, data.code)
    return AuthResponse(success=True, user=UserResponse.model_validate(user), token=token)


@router.post(
    "/google",
    response_model=AuthResponse,
    summary="Google login",
    description="Log in with a Firebase ID token from Google sign-in.",
)
async def google_login(
    data: GoogleLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = await auth_service.login_with_google(data.token)
    return AuthResponse(success=True, user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Get the authenticated user's profile."""
    return UserResponse.model_validate(current_user)
