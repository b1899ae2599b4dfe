"""Photo upload API routes."""

from fastapi import APIRouter, File, UploadFile, status

from src.api.deps import CurrentUser
from src.schemas.photo import PhotoUploadResponse
from src.services.photo_service import PhotoService

router = APIRouter(prefix="/photos", tags=["photos"])


@router.post(
    "",
    response_model=PhotoUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a profile photo",
    responses={
        400: {"description": "Invalid file type or file too large"},
        503: {"description": "Photo storage unavailable"},
    },
)
async def upload_photo(
    user: CurrentUser,
    photo: UploadFile = File(..., description="JPEG, PNG or WebP image, max 5MB"),
) -> PhotoUploadResponse:
    """Store a photo and return its URL for use in the duo profile's photos list."""
    photo_url = await PhotoService().upload_photo(user.user_id, photo)
    return PhotoUploadResponse(photo_url=photo_url)
