"""Profile photo upload to Supabase Storage."""

import logging
from uuid import UUID, uuid4

from fastapi import UploadFile
from supabase import Client

from src.api.middleware.error_handler import StorageUnavailableError, ValidationError
from src.core.config import get_settings
from src.core.supabase import get_supabase_client

logger = logging.getLogger(__name__)

# Allowed MIME types mapped to the stored file extension
ALLOWED_MIME_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class PhotoUploadError(ValidationError):
    """Uploaded file is not an acceptable photo."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, error_type="invalid_photo", status_code=400)


class PhotoService:
    """Stores photos and hands back URLs to save on duo profiles."""

    def __init__(
        self,
        client: Client | None = None,
        bucket: str | None = None,
        max_size_bytes: int | None = None,
    ) -> None:
        settings = get_settings()
        self.client = client or get_supabase_client()
        self.bucket = bucket or settings.photo_bucket
        self.max_size_bytes = max_size_bytes or settings.max_photo_size_bytes

    async def upload_photo(self, user_id: UUID, file: UploadFile) -> str:
        """Validate and store a photo.

        Args:
            user_id: Uploading user; photos are stored under their folder.
            file: Uploaded image.

        Returns:
            str: Public URL of the stored photo.

        Raises:
            PhotoUploadError: If the type or size is not allowed.
            StorageUnavailableError: If the storage service rejects the upload.
        """
        extension = ALLOWED_MIME_TYPES.get(file.content_type or "")
        if extension is None:
            raise PhotoUploadError("Only JPEG, PNG, and WebP images are allowed")

        content = await file.read()
        if not content:
            raise PhotoUploadError("No photo uploaded")
        if len(content) > self.max_size_bytes:
            raise PhotoUploadError(
                f"File too large: {len(content) / (1024 * 1024):.1f} MB. "
                f"Maximum size: {self.max_size_bytes / (1024 * 1024):.0f} MB"
            )

        storage_path = f"{user_id}/photo-{uuid4().hex}.{extension}"
        bucket = self.client.storage.from_(self.bucket)

        try:
            bucket.upload(
                path=storage_path,
                file=content,
                file_options={"content-type": file.content_type},
            )
        except Exception as e:
            logger.error("Photo upload to %s failed: %s", storage_path, e)
            raise StorageUnavailableError("Photo upload failed") from e

        logger.info("Stored photo %s (%d bytes)", storage_path, len(content))
        return bucket.get_public_url(storage_path)
