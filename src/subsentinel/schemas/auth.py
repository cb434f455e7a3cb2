"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# E.164: leading +, country code, up to 15 digits total
PHONE_PATTERN = r"^\+[1-9]\d{6,14}$"


class OTPSendRequest(BaseModel):
    """Request model for sending an OTP."""

    phone: str = Field(..., pattern=PHONE_PATTERN, description="Phone number in E.164 format")


class OTPSendResponse(BaseModel):
    success: bool = True
    message: str = "OTP sent"


class OTPVerifyRequest(BaseModel):
    """Request model for verifying an OTP."""

    phone: str = Field(..., pattern=PHONE_PATTERN, description="Phone number in E.164 format")
    code: str = Field(..., min_length=4, max_length=10, description="Code received by SMS")


class GoogleLoginRequest(BaseModel):
    """Request model for identity-provider login."""

    token: str = Field(..., min_length=1, description="Identity-provider ID token")


class UserResponse(BaseModel):
    """Response model for user data."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    phone: str | None = None
    email: str | None = None
    display_name: str | None = Field(None, alias="displayName")
    photo_url: str | None = Field(None, alias="photoUrl")
    created_at: datetime = Field(alias="createdAt")


class AuthResponse(BaseModel):
    """Response model for a successful login."""

    success: bool = True
    user: UserResponse
    token: str = Field(..., description="Bearer token for subsequent requests")
