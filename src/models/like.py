"""Like model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Like(TypedDict):
    """Likes table row representation.

    A directed interest edge. The (from_profile_id, to_profile_id) pair is
    unique in the table.
    """

    id: UUID
    from_profile_id: UUID
    to_profile_id: UUID
    created_at: datetime
