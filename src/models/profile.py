"""Duo profile model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class DuoProfile(TypedDict):
    """Duo profile table row representation.

    One row per user. Rows are never hard-deleted; clearing is_active
    removes a profile from browsing.
    """

    id: UUID
    user_id: UUID
    couple_name: str
    ages: str | None
    location: str | None
    bio: str | None
    interests: list[str]
    photos: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class DuoProfileCreate(TypedDict, total=False):
    """Data required to create a new duo profile.

    Only user_id and couple_name are required; timestamps are set by the service.
    """

    user_id: UUID
    couple_name: str
    ages: str | None
    location: str | None
    bio: str | None
    interests: list[str]
    photos: list[str]
    is_active: bool
    created_at: str
    updated_at: str
