"""Domain exceptions.

Every exception raised by the service layer derives from ``AppError`` and
carries an ``error_code`` from the catalog in errors.py plus the HTTP status
the API boundary answers with.
"""

from typing import Any

from subsentinel.core.errors import get_message


class AppError(Exception):
    """Base exception for all domain errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "RES_001")
        message: Message returned to the caller (catalog message by default)
        details: Additional context about the error (for logging only)
        http_status: HTTP status code to return
    """

    http_status: int = 500

    def __init__(
        self,
        error_code: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code
        self.message = message or get_message(error_code)
        self.details = details or {}
        if http_status is not None:
            self.http_status = http_status
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    http_status = 400


class UnauthorizedError(AppError):
    """Missing, invalid or expired token, or a credential mismatch."""

    http_status = 401


class NotFoundError(AppError):
    """Referenced entity is absent or not owned by the caller.

    Ownership mismatches raise this too, never a forbidden error.
    """

    http_status = 404


class ConflictError(AppError):
    """Uniqueness violation."""

    http_status = 409


class UpstreamError(AppError):
    """A third-party provider call failed."""

    http_status = 500
