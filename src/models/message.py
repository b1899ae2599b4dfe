"""Message model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Message(TypedDict):
    """Message table row representation.

    Represents a message stored in the messages table.
    """

    id: UUID
    match_id: UUID
    sender_profile_id: UUID
    content: str
    created_at: datetime
