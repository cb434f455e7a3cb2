"""Pydantic schemas for subscription endpoints."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subsentinel.models.subscription import SubscriptionStatus
from subsentinel.schemas.category import CategoryResponse


def _assume_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SubscriptionCreate(BaseModel):
    """Request model for creating a subscription.

    ``categoryId`` is kept as a raw string: values that are not valid ids are
    dropped by the service instead of failing the request.
    """

    model_config = ConfigDict(populate_by_name=True)

    provider: str = Field(..., min_length=1, max_length=255, description="Merchant name")
    amount: float = Field(..., ge=0, description="Charge amount")
    currency: str = Field("USD", min_length=3, max_length=3)
    next_billing: datetime | None = Field(None, description="Next renewal (ISO 8601)")
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    category_id: str | None = Field(None, alias="categoryId")
    logo_url: str | None = Field(None, alias="logoUrl", max_length=1024)

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.upper()

    @field_validator("next_billing")
    @classmethod
    def _next_billing_utc(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)


class SubscriptionStatusUpdate(BaseModel):
    status: SubscriptionStatus


class SubscriptionResponse(BaseModel):
    """Subscription data for API responses, with the category resolved."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    provider: str
    amount: float
    currency: str
    next_billing: datetime | None = None
    status: SubscriptionStatus
    category_id: UUID | None = Field(None, alias="categoryId")
    category: CategoryResponse | None = None
    logo_url: str | None = Field(None, alias="logoUrl")
    is_default: bool = Field(alias="isDefault")
    user_id: UUID | None = Field(None, alias="userId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class RenewalInfo(BaseModel):
    """A subscription renewing inside the dashboard window."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str = Field(description="Provider name")
    amount: float
    days_left: int = Field(alias="daysLeft", description="Whole days until renewal, rounded up")


class SubscriptionSummary(BaseModel):
    """Dashboard aggregation over the caller's subscriptions."""

    model_config = ConfigDict(populate_by_name=True)

    total_burn: float = Field(alias="totalBurn", description="Sum of active amounts")
    active_count: int = Field(alias="activeCount")
    total_count: int = Field(alias="totalCount")
    renewing_soon: list[RenewalInfo] = Field(alias="renewingSoon")
    currency: str


class TemplateCreate(BaseModel):
    """Request model for an admin-managed subscription template."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    category_id: str | None = Field(None, alias="categoryId")
    logo_url: str | None = Field(None, alias="logoUrl", max_length=1024)


class TemplateUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: str | None = Field(None, min_length=1, max_length=255)
    amount: float | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    category_id: str | None = Field(None, alias="categoryId")
    logo_url: str | None = Field(None, alias="logoUrl", max_length=1024)

    @field_validator("provider", "amount", "currency")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value
