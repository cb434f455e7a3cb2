"""Pydantic schemas for checkout sessions."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., min_length=1, alias="productId")
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)


class CheckoutResponse(BaseModel):
    url: str = Field(..., description="Hosted checkout URL")
