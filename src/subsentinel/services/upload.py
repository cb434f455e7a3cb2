"""Validation and storage of admin-uploaded images."""

import logging

from subsentinel.core.exceptions import UpstreamError, ValidationError
from subsentinel.integrations.storage import BlobStore

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
        "image/x-icon",
        "image/bmp",
        "image/tiff",
        "image/vnd.adobe.photoshop",
    }
)


def validate_upload(content_type: str | None, size: int, max_size_mb: int) -> None:
    """
    Reject files that are not images or exceed the size limit.

    Raises:
        ValidationError: UPL_002 for the type, UPL_003 for the size
    """
    if content_type not in ALLOWED_MIME_TYPES:
        raise ValidationError(
            "UPL_002",
            message=(
                f"Invalid file type: {content_type}. "
                f"Allowed types: {', '.join(sorted(ALLOWED_MIME_TYPES))}"
            ),
        )
    if size > max_size_mb * 1024 * 1024:
        raise ValidationError("UPL_003", message=f"File size exceeds limit of {max_size_mb}MB")


async def store_upload(
    blobs: BlobStore,
    data: bytes,
    content_type: str | None,
    filename: str | None,
    max_size_mb: int,
) -> str:
    """Validate and store an upload, returning its public URL."""
    validate_upload(content_type, len(data), max_size_mb)
    try:
        url = await blobs.put(data, content_type=content_type, filename=filename)
    except OSError as exc:
        logger.error("Blob write failed", extra={"error_type": type(exc).__name__})
        raise UpstreamError("UPS_004") from exc
    logger.info("File uploaded", extra={"size": len(data), "content_type": content_type})
    return url
