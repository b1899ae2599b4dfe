"""Match resolution and match listing.

A match exists for a pair exactly when both directed likes exist. It is
materialized inline, right after a like is recorded, and the store's
unique index on the canonical pair makes that creation happen once even
when both duos like each other at the same moment.
"""

import logging
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import DuplicateLikeError
from src.core.clock import Clock, utc_now
from src.core.store import MatchStore, StoreUnavailableError, UniqueViolationError, canonical_pair
from src.schemas.like import LikeStatus
from src.services.like_service import LikeService

logger = logging.getLogger(__name__)


@dataclass
class LikeOutcome:
    """Result of a like request."""

    status: LikeStatus
    like: dict[str, Any]
    match: dict[str, Any] | None = None


class MatchService:
    """Service for turning reciprocal likes into matches."""

    def __init__(
        self,
        store: MatchStore,
        like_service: LikeService | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.store = store
        self.clock = clock
        self.like_service = like_service or LikeService(store, clock)

    async def like_profile(self, from_profile_id: UUID | str, to_profile_id: UUID | str) -> LikeOutcome:
        """Record a like and resolve a match if it is reciprocated.

        A repeat like is not an error here: it reports already_liked along
        with the pair's match, if any.

        Args:
            from_profile_id: The caller's profile.
            to_profile_id: Profile being liked.

        Returns:
            LikeOutcome: pending, matched or already_liked.
        """
        try:
            like = await self.like_service.record_like(from_profile_id, to_profile_id)
        except DuplicateLikeError as e:
            like = e.existing_like or await self.like_service.find_like(from_profile_id, to_profile_id)
            match = await self.try_match(from_profile_id, to_profile_id)
            return LikeOutcome(status=LikeStatus.ALREADY_LIKED, like=like, match=match)

        match = await self.try_match(from_profile_id, to_profile_id)
        status = LikeStatus.MATCHED if match else LikeStatus.PENDING
        return LikeOutcome(status=status, like=like, match=match)

    async def try_match(self, profile_a: UUID | str, profile_b: UUID | str) -> dict[str, Any] | None:
        """Create or return the match for a pair once both duos like each other.

        Usually called right after recording the like (profile_a -> profile_b),
        but both directions are checked so argument order does not matter.

        Args:
            profile_a: Profile whose like was just recorded.
            profile_b: Profile that was liked.

        Returns:
            dict | None: The pair's match, or None unless both likes exist.
        """
        forward = await self.like_service.find_like(profile_a, profile_b)
        reverse = await self.like_service.find_like(profile_b, profile_a)
        if not forward or not reverse:
            return None

        profile_1_id, profile_2_id = canonical_pair(profile_a, profile_b)

        existing = self.store.get_match_by_pair(profile_1_id, profile_2_id)
        if existing:
            return existing

        try:
            match = self.store.insert_match(profile_1_id, profile_2_id, self.clock())
        except UniqueViolationError:
            existing = self.store.get_match_by_pair(profile_1_id, profile_2_id)
            if existing is None:
                raise StoreUnavailableError(
                    f"Match for {profile_1_id}/{profile_2_id} conflicted but cannot be read"
                )
            logger.info(
                "Match for %s/%s was created concurrently, reusing %s",
                profile_1_id,
                profile_2_id,
                existing["id"],
            )
            return existing

        logger.info("Matched %s with %s (match %s)", profile_1_id, profile_2_id, match["id"])
        return match

    async def get_match_for_pair(self, profile_a: UUID | str, profile_b: UUID | str) -> dict[str, Any] | None:
        """Return the match for an unordered pair, or None."""
        return self.store.get_match_by_pair(*canonical_pair(profile_a, profile_b))

    async def list_matches_for_profile(self, profile_id: UUID | str) -> list[dict[str, Any]]:
        """List a profile's matches, newest first, each with the other duo's profile.

        Args:
            profile_id: The caller's profile.

        Returns:
            list[dict]: Match rows with an added "profile" key.
        """
        pid = str(profile_id)
        matches = [
            match
            for match in self.store.list_matches_for_profile(pid)
            if match.get("is_matched", True)
        ]

        other_ids = [
            match["profile_2_id"] if match["profile_1_id"] == pid else match["profile_1_id"]
            for match in matches
        ]
        profiles = {profile["id"]: profile for profile in self.store.get_profiles(other_ids)}

        enriched = []
        for match, other_id in zip(matches, other_ids):
            profile = profiles.get(other_id)
            if profile is None:
                logger.warning("Match %s references missing profile %s", match["id"], other_id)
                continue
            enriched.append({**match, "profile": profile})

        return enriched
