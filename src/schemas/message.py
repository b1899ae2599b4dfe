"""Message Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    """Schema for posting a message to a match thread.

    Emptiness and length are checked by the service on the trimmed text,
    so surrounding whitespace never counts against the limit.
    """

    model_config = ConfigDict(from_attributes=True)

    content: str = Field(..., description="Message text")


class MessageResponse(BaseModel):
    """Schema for message API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Message unique identifier")
    match_id: UUID = Field(description="Parent match ID")
    sender_profile_id: UUID = Field(description="Profile that sent the message")
    content: str = Field(description="Trimmed message text")
    created_at: datetime = Field(description="Creation timestamp")
