"""Duo profile Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_INTERESTS = 20
MAX_PHOTOS = 6

InterestList = Annotated[list[str], Field(max_length=MAX_INTERESTS)]
PhotoList = Annotated[list[str], Field(max_length=MAX_PHOTOS)]


def _clean_tags(values: list[str]) -> list[str]:
    """Strip tags, drop blanks and repeats, keep first-seen order."""
    seen: list[str] = []
    for value in values:
        tag = value.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class DuoProfileBase(BaseModel):
    """Display fields shared across duo profile schemas."""

    couple_name: str = Field(..., min_length=1, max_length=100, description="Name shown for the duo")
    ages: str | None = Field(default=None, max_length=50, description="Free-text ages, e.g. '28 & 31'")
    location: str | None = Field(default=None, max_length=120, description="City or area")
    bio: str | None = Field(default=None, min_length=10, max_length=500, description="About the duo")
    interests: InterestList = Field(default_factory=list, description="Interest tags")
    photos: PhotoList = Field(default_factory=list, description="Photo URLs")

    @field_validator("interests", "photos")
    @classmethod
    def clean_lists(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)


class DuoProfileCreate(DuoProfileBase):
    """Schema for creating the caller's duo profile."""

    model_config = ConfigDict(from_attributes=True)

    is_active: bool = Field(default=True, description="Whether the profile is browsable")


class DuoProfileUpdate(BaseModel):
    """Schema for updating a duo profile.

    All fields are optional for partial updates.
    """

    model_config = ConfigDict(from_attributes=True)

    couple_name: str | None = Field(default=None, min_length=1, max_length=100)
    ages: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=120)
    bio: str | None = Field(default=None, min_length=10, max_length=500)
    interests: InterestList | None = Field(default=None)
    photos: PhotoList | None = Field(default=None)
    is_active: bool | None = Field(default=None, description="Set false to hide the profile")

    @field_validator("interests", "photos")
    @classmethod
    def clean_lists(cls, value: list[str] | None) -> list[str] | None:
        return _clean_tags(value) if value is not None else None


class DuoProfileSummary(BaseModel):
    """Public view of a duo profile, as shown to other users."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(description="Profile unique identifier")
    couple_name: str = Field(description="Name shown for the duo")
    ages: str | None = Field(default=None)
    location: str | None = Field(default=None)
    bio: str | None = Field(default=None)
    interests: list[str] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list)


class DuoProfileResponse(DuoProfileSummary):
    """Schema for the owner's view of a duo profile."""

    user_id: UUID = Field(description="Owning auth user ID")
    is_active: bool = Field(description="Whether the profile is browsable")
    created_at: datetime = Field(description="Profile creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
