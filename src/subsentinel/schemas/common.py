"""Shared response shapes."""

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Acknowledgement for operations without a payload."""

    success: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """Uniform error envelope returned by every exception handler."""

    success: bool = Field(default=False)
    error: str = Field(description="Human-readable error message")
    error_code: str = Field(description="Code from the error catalog")
