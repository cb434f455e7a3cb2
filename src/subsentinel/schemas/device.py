"""Pydantic schemas for device registration."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DeviceRegister(BaseModel):
    token: str = Field(..., min_length=1, max_length=512, description="FCM registration token")
    platform: str = Field(..., min_length=1, max_length=32, description="e.g. 'ios', 'android'")


class DeviceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    token: str
    user_id: UUID | None = Field(None, alias="userId")
    platform: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
