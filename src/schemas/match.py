"""Match Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.profile import DuoProfileSummary


class MatchResponse(BaseModel):
    """Schema for a match between two duo profiles."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Match unique identifier")
    profile_1_id: UUID = Field(description="First profile of the canonical pair")
    profile_2_id: UUID = Field(description="Second profile of the canonical pair")
    is_matched: bool = Field(default=True, description="Whether the match is active")
    created_at: datetime = Field(description="When the match was made")


class MatchWithProfileResponse(MatchResponse):
    """Match enriched with the other participant's profile."""

    profile: DuoProfileSummary = Field(description="The other duo in the match")
