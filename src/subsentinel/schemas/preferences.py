"""Pydantic schemas for onboarding preferences."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from subsentinel.models.preferences import AlertTiming, SpendingAwareness


class PreferencesSave(BaseModel):
    """Request model for saving preferences.

    Omitted optional fields fall back to their defaults on every save, except
    ``categories`` which is only replaced when provided.
    """

    model_config = ConfigDict(populate_by_name=True)

    budget: float = Field(..., ge=0, description="Monthly budget")
    spending_awareness: SpendingAwareness | None = Field(None, alias="spendingAwareness")
    categories: list[UUID] | None = None
    pain_points: list[str] | None = Field(None, alias="painPoints")
    goals: list[str] | None = None
    alert_timing: AlertTiming | None = Field(None, alias="alertTiming")


class PreferencesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    user_id: UUID = Field(alias="userId")
    budget: float
    spending_awareness: SpendingAwareness = Field(alias="spendingAwareness")
    categories: list[str]
    pain_points: list[str] = Field(alias="painPoints")
    goals: list[str]
    alert_timing: AlertTiming = Field(alias="alertTiming")
    onboarding_complete: bool = Field(alias="onboardingComplete")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class OnboardingStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    onboarding_complete: bool = Field(alias="onboardingComplete")
