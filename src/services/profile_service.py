"""Duo profile business logic service."""

import logging
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import (
    ConflictError,
    ProfileNotFoundError,
    ProfileRequiredError,
)
from src.core.clock import Clock, utc_now
from src.core.store import MatchStore, UniqueViolationError
from src.schemas.profile import DuoProfileCreate, DuoProfileUpdate

logger = logging.getLogger(__name__)


class DuoProfileService:
    """Service for managing duo profiles.

    Matching and messaging only read profiles; every write goes through here.
    """

    DEFAULT_BROWSE_LIMIT = 20

    def __init__(self, store: MatchStore, clock: Clock = utc_now) -> None:
        self.store = store
        self.clock = clock

    async def create_profile(self, user_id: UUID, data: DuoProfileCreate) -> dict[str, Any]:
        """Create the user's duo profile.

        Args:
            user_id: The auth user ID.
            data: Profile fields.

        Returns:
            dict: The created profile data.

        Raises:
            ConflictError: If the user already has a duo profile.
        """
        if self.store.get_profile_by_user(user_id):
            raise ConflictError("User already has a duo profile")

        now = self.clock().isoformat()
        profile_data = {
            **data.model_dump(),
            "user_id": str(user_id),
            "created_at": now,
            "updated_at": now,
        }

        try:
            profile = self.store.create_profile(profile_data)
        except UniqueViolationError as e:
            raise ConflictError("User already has a duo profile") from e

        logger.info("Created duo profile %s for user %s", profile["id"], user_id)
        return profile

    async def get_profile(self, profile_id: UUID | str) -> dict[str, Any]:
        """Get a profile by profile ID.

        Raises:
            ProfileNotFoundError: If no such profile exists.
        """
        profile = self.store.get_profile(profile_id)
        if not profile:
            raise ProfileNotFoundError()
        return profile

    async def get_profile_for_user(self, user_id: UUID) -> dict[str, Any]:
        """Get the duo profile owned by a user.

        Raises:
            ProfileRequiredError: If the user has not created one yet.
        """
        profile = self.store.get_profile_by_user(user_id)
        if not profile:
            raise ProfileRequiredError()
        return profile

    async def update_profile(self, user_id: UUID, data: DuoProfileUpdate) -> dict[str, Any]:
        """Apply a partial update to the user's own profile.

        Args:
            user_id: The auth user ID.
            data: The fields to update.

        Returns:
            dict: The updated profile data.
        """
        profile = await self.get_profile_for_user(user_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if not update_data:
            return profile

        update_data["updated_at"] = self.clock().isoformat()
        updated = self.store.update_profile(profile["id"], update_data)
        if not updated:
            raise ProfileNotFoundError()
        return updated

    async def browse_profiles(self, user_id: UUID, limit: int | None = None) -> list[dict[str, Any]]:
        """List active profiles other than the caller's own.

        The caller must own a profile. Order is whatever the store returns.
        """
        await self.get_profile_for_user(user_id)
        return self.store.list_active_profiles(user_id, limit or self.DEFAULT_BROWSE_LIMIT)
