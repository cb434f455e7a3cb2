"""Pydantic schemas for the admin panel."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AdminLoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class AdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    username: str
    display_name: str | None = Field(None, alias="displayName")
    created_at: datetime = Field(alias="createdAt")


class AdminLoginResponse(BaseModel):
    admin: AdminResponse
    token: str


class UploadResponse(BaseModel):
    success: bool = True
    url: str = Field(..., description="Public URL of the stored object")
