"""Like Pydantic schemas for API request/response models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.match import MatchResponse


class LikeStatus(str, Enum):
    """What a like request achieved."""

    PENDING = "pending"
    MATCHED = "matched"
    ALREADY_LIKED = "already_liked"


class LikeCreate(BaseModel):
    """Schema for liking another duo profile."""

    model_config = ConfigDict(from_attributes=True)

    to_profile_id: UUID = Field(..., description="Profile being liked")


class LikeResponse(BaseModel):
    """Schema for a recorded like."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Like unique identifier")
    from_profile_id: UUID = Field(description="Profile that liked")
    to_profile_id: UUID = Field(description="Profile that was liked")
    created_at: datetime = Field(description="Creation timestamp")


class LikeResultResponse(BaseModel):
    """Outcome of a like request, with the match when one exists."""

    model_config = ConfigDict(from_attributes=True)

    status: LikeStatus = Field(description="pending, matched or already_liked")
    like: LikeResponse = Field(description="The like edge from the caller to the target")
    match: MatchResponse | None = Field(default=None, description="Match for the pair, if reciprocated")
