"""Blob storage for uploaded logos, with a local filesystem backend.

Objects are written under ``base_dir`` and served by the application under
``/uploads``; the store hands back public URLs rather than storage refs.
"""

import asyncio
import mimetypes
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol


class BlobStore(Protocol):
    """Protocol for blob storage backends."""

    async def put(self, data: bytes, *, content_type: str, filename: str | None = None) -> str:
        """Store blob, return its public URL."""
        ...

    async def exists(self, key: str) -> bool:
        ...


class LocalBlobStore:
    """Filesystem-backed blob store.

    Keys are date-partitioned with a random suffix to avoid collisions:
    ``uploads/2026/02/16/a1b2c3d4-....png``.

    Args:
        base_dir: Root directory for blob storage
        public_base_url: Origin the ``/uploads`` mount is reachable at
    """

    def __init__(self, base_dir: Path | str, public_base_url: str):
        self.base_dir = Path(base_dir).resolve()
        self.public_base_url = public_base_url.rstrip("/")

    def _generate_key(self, content_type: str, filename: str | None = None) -> str:
        date_prefix = datetime.now(timezone.utc).strftime("%Y/%m/%d")

        ext = Path(filename).suffix if filename else ""
        if not ext:
            ext = mimetypes.guess_extension(content_type) or ".bin"

        return f"{date_prefix}/{uuid.uuid4()}{ext}"

    def _key_to_path(self, key: str) -> Path:
        resolved_path = (self.base_dir / key).resolve()
        try:
            resolved_path.relative_to(self.base_dir)
        except ValueError as e:
            raise ValueError(f"Path traversal attempt detected: {key}") from e
        return resolved_path

    def url_for(self, key: str) -> str:
        return f"{self.public_base_url}/uploads/{key}"

    async def put(self, data: bytes, *, content_type: str, filename: str | None = None) -> str:
        key = self._generate_key(content_type, filename)
        file_path = self._key_to_path(key)

        def _write() -> None:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)

        await asyncio.to_thread(_write)
        return self.url_for(key)

    async def exists(self, key: str) -> bool:
        return self._key_to_path(key).is_file()
