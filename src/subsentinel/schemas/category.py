"""Pydantic schemas for category endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryCreate(BaseModel):
    """Request model for creating a category."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    icon: str = Field(..., min_length=1, max_length=100, description="Icon token, e.g. 'movie'")
    color: str = Field(..., min_length=1, max_length=32, description="Hex colour, e.g. '#E50914'")
    logo_url: str | None = Field(None, alias="logoUrl", max_length=1024)


class CategoryUpdate(BaseModel):
    """Request model for a partial category update."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(None, min_length=1, max_length=100)
    icon: str | None = Field(None, min_length=1, max_length=100)
    color: str | None = Field(None, min_length=1, max_length=32)
    logo_url: str | None = Field(None, alias="logoUrl", max_length=1024)

    @field_validator("name", "icon", "color")
    @classmethod
    def _not_null(cls, value: str | None) -> str:
        # Omit a field to leave it unchanged; only logoUrl can be cleared.
        if value is None:
            raise ValueError("may not be null")
        return value


class CategoryResponse(BaseModel):
    """Category data for API responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    name: str
    icon: str
    color: str
    logo_url: str | None = Field(None, alias="logoUrl")
    is_default: bool = Field(alias="isDefault")
    user_id: UUID | None = Field(None, alias="userId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
