"""Unit tests for PhotoService."""

import io
from unittest.mock import MagicMock
from uuid import UUID

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from src.api.middleware.error_handler import StorageUnavailableError
from src.services.photo_service import PhotoService, PhotoUploadError

USER_ID = UUID("550e8400-e29b-41d4-a716-446655440000")


def _upload(content: bytes, content_type: str = "image/jpeg", filename: str = "photo.jpg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def mock_supabase() -> MagicMock:
    """Create a mock Supabase client with a storage bucket."""
    client = MagicMock()
    client.storage.from_.return_value.get_public_url.return_value = "https://cdn.example.com/photo.jpg"
    return client


@pytest.fixture
def photo_service(mock_supabase: MagicMock) -> PhotoService:
    """Create PhotoService with a 1 KB limit."""
    return PhotoService(client=mock_supabase, bucket="duo-photos", max_size_bytes=1024)


class TestUploadPhoto:
    """Tests for upload_photo method."""

    @pytest.mark.asyncio
    async def test_uploads_and_returns_public_url(
        self, photo_service: PhotoService, mock_supabase: MagicMock
    ) -> None:
        """Test a valid photo is stored under the user's folder."""
        url = await photo_service.upload_photo(USER_ID, _upload(b"jpeg-bytes"))

        assert url == "https://cdn.example.com/photo.jpg"
        mock_supabase.storage.from_.assert_called_with("duo-photos")
        upload_kwargs = mock_supabase.storage.from_.return_value.upload.call_args.kwargs
        assert upload_kwargs["path"].startswith(f"{USER_ID}/photo-")
        assert upload_kwargs["path"].endswith(".jpg")
        assert upload_kwargs["file"] == b"jpeg-bytes"

    @pytest.mark.asyncio
    async def test_png_gets_png_extension(self, photo_service: PhotoService, mock_supabase: MagicMock) -> None:
        """Test the stored extension follows the content type."""
        await photo_service.upload_photo(USER_ID, _upload(b"png", "image/png", "photo.png"))

        path = mock_supabase.storage.from_.return_value.upload.call_args.kwargs["path"]
        assert path.endswith(".png")

    @pytest.mark.asyncio
    async def test_rejects_unsupported_type(self, photo_service: PhotoService, mock_supabase: MagicMock) -> None:
        """Test non-image uploads are refused before storage is touched."""
        with pytest.raises(PhotoUploadError):
            await photo_service.upload_photo(USER_ID, _upload(b"%PDF", "application/pdf", "doc.pdf"))

        mock_supabase.storage.from_.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_oversized_file(self, photo_service: PhotoService) -> None:
        """Test files over the size limit are refused."""
        with pytest.raises(PhotoUploadError) as exc_info:
            await photo_service.upload_photo(USER_ID, _upload(b"x" * 2048))

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_rejects_empty_file(self, photo_service: PhotoService) -> None:
        """Test an empty upload is refused."""
        with pytest.raises(PhotoUploadError):
            await photo_service.upload_photo(USER_ID, _upload(b""))

    @pytest.mark.asyncio
    async def test_storage_failure_is_unavailable(
        self, photo_service: PhotoService, mock_supabase: MagicMock
    ) -> None:
        """Test a storage error surfaces as StorageUnavailableError."""
        mock_supabase.storage.from_.return_value.upload.side_effect = RuntimeError("bucket offline")

        with pytest.raises(StorageUnavailableError):
            await photo_service.upload_photo(USER_ID, _upload(b"jpeg-bytes"))
