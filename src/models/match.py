"""Match model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Match(TypedDict):
    """Matches table row representation.

    profile_1_id and profile_2_id hold the canonical ordering of the pair,
    and that ordered pair is unique in the table.
    """

    id: UUID
    profile_1_id: UUID
    profile_2_id: UUID
    is_matched: bool
    created_at: datetime
