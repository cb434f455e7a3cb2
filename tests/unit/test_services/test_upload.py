"""Unit tests for upload validation and storage."""

from unittest.mock import AsyncMock, Mock

import pytest

from subsentinel.api.routes.admin import upload_file
from subsentinel.config import settings
from subsentinel.core.exceptions import UpstreamError, ValidationError
from subsentinel.integrations.storage import LocalBlobStore
from subsentinel.services.upload import store_upload, validate_upload


class TestValidateUpload:
    @pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "image/svg+xml", "image/webp"])
    def test_images_accepted(self, content_type):
        validate_upload(content_type, 1024, max_size_mb=5)

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None])
    def test_non_images_rejected(self, content_type):
        with pytest.raises(ValidationError) as exc_info:
            validate_upload(content_type, 1024, max_size_mb=5)

        assert exc_info.value.error_code == "UPL_002"

    def test_size_limit_is_inclusive(self):
        validate_upload("image/png", 5 * 1024 * 1024, max_size_mb=5)

    def test_oversized_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_upload("image/png", 5 * 1024 * 1024 + 1, max_size_mb=5)

        assert exc_info.value.error_code == "UPL_003"
        assert "5MB" in exc_info.value.message


class TestStoreUpload:
    @pytest.mark.asyncio
    async def test_stores_and_returns_url(self, tmp_path):
        store = LocalBlobStore(tmp_path, "http://test")

        url = await store_upload(store, b"\x89PNG", "image/png", "logo.png", max_size_mb=5)

        assert url.startswith("http://test/uploads/")

    @pytest.mark.asyncio
    async def test_write_failure_maps_to_upstream_error(self, tmp_path):
        class FailingStore:
            async def put(self, data, *, content_type, filename=None):
                raise OSError("disk full")

            async def exists(self, key):
                return False

        with pytest.raises(UpstreamError) as exc_info:
            await store_upload(FailingStore(), b"data", "image/png", "logo.png", max_size_mb=5)

        assert exc_info.value.error_code == "UPS_004"

    @pytest.mark.asyncio
    async def test_invalid_type_is_not_stored(self, tmp_path):
        store = LocalBlobStore(tmp_path, "http://test")

        with pytest.raises(ValidationError):
            await store_upload(store, b"%PDF", "application/pdf", "doc.pdf", max_size_mb=5)

        assert not any(tmp_path.iterdir())


class TestUploadRoute:
    @staticmethod
    def make_file(size: int, data: bytes = b"\x89PNG") -> Mock:
        file = Mock(content_type="image/png", filename="logo.png", size=size)
        file.read = AsyncMock(return_value=data)
        return file

    @pytest.mark.asyncio
    async def test_declared_size_rejected_before_reading(self, tmp_path):
        file = self.make_file(size=settings.upload_max_size_mb * 1024 * 1024 + 1)

        with pytest.raises(ValidationError) as exc_info:
            await upload_file(file=file, admin=Mock(), blobs=LocalBlobStore(tmp_path, "http://test"))

        assert exc_info.value.error_code == "UPL_003"
        file.read.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_read_is_bounded_by_limit(self, tmp_path):
        file = self.make_file(size=None)

        response = await upload_file(file=file, admin=Mock(), blobs=LocalBlobStore(tmp_path, "http://test"))

        assert response.url.startswith("http://test/uploads/")
        file.read.assert_awaited_once_with(settings.upload_max_size_mb * 1024 * 1024 + 1)
