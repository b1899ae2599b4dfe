"""Photo upload schemas."""

from pydantic import BaseModel, Field


class PhotoUploadResponse(BaseModel):
    """URL of an uploaded profile photo."""

    photo_url: str = Field(description="Public URL to store on the duo profile")
