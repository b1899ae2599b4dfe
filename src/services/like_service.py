"""Like ledger: directed interest edges between duo profiles."""

import logging
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import (
    DuplicateLikeError,
    ProfileNotFoundError,
    SelfLikeError,
)
from src.core.clock import Clock, utc_now
from src.core.store import MatchStore, UniqueViolationError

logger = logging.getLogger(__name__)


class LikeService:
    """Records likes. Does not look for reciprocity; see MatchService."""

    def __init__(self, store: MatchStore, clock: Clock = utc_now) -> None:
        self.store = store
        self.clock = clock

    async def record_like(self, from_profile_id: UUID | str, to_profile_id: UUID | str) -> dict[str, Any]:
        """Persist a like from one profile to another.

        Args:
            from_profile_id: Profile expressing interest.
            to_profile_id: Profile being liked.

        Returns:
            dict: The created like.

        Raises:
            SelfLikeError: If both ids are the same profile.
            ProfileNotFoundError: If either profile does not exist, or the target is deactivated.
            DuplicateLikeError: If this ordered pair is already recorded.
        """
        if str(from_profile_id) == str(to_profile_id):
            raise SelfLikeError()

        if not self.store.get_profile(from_profile_id):
            raise ProfileNotFoundError()
        target = self.store.get_profile(to_profile_id)
        # Deactivated profiles are hidden, so they cannot be liked either
        if not target or not target.get("is_active", True):
            raise ProfileNotFoundError("Liked profile not found")

        existing = await self.find_like(from_profile_id, to_profile_id)
        if existing:
            raise DuplicateLikeError(existing)

        try:
            like = self.store.insert_like(from_profile_id, to_profile_id, self.clock())
        except UniqueViolationError as e:
            # Same pair inserted by a concurrent request since the lookup
            raise DuplicateLikeError(await self.find_like(from_profile_id, to_profile_id)) from e

        logger.info("Profile %s liked %s", from_profile_id, to_profile_id)
        return like

    async def find_like(self, from_profile_id: UUID | str, to_profile_id: UUID | str) -> dict[str, Any] | None:
        """Return the like for the ordered pair, or None."""
        return self.store.get_like(from_profile_id, to_profile_id)
