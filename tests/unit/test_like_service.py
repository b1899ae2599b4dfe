"""Unit tests for LikeService."""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.api.middleware.error_handler import DuplicateLikeError, ProfileNotFoundError, SelfLikeError
from src.core.store import InMemoryMatchStore, UniqueViolationError
from src.services.like_service import LikeService

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def like_service(store: InMemoryMatchStore) -> LikeService:
    """Create LikeService with a fixed clock."""
    return LikeService(store, clock=lambda: NOW)


@pytest.fixture
def duo_ids(store: InMemoryMatchStore) -> tuple[str, str]:
    """Create two duo profiles and return their ids."""
    a = store.create_profile({"user_id": uuid4(), "couple_name": "Sam & Alex"})
    b = store.create_profile({"user_id": uuid4(), "couple_name": "Jo & Kim"})
    return a["id"], b["id"]


class TestRecordLike:
    """Tests for record_like method."""

    @pytest.mark.asyncio
    async def test_records_like(self, like_service: LikeService, duo_ids: tuple[str, str]) -> None:
        """Test a like is stored with the clock's timestamp."""
        a, b = duo_ids

        like = await like_service.record_like(a, b)

        assert like["from_profile_id"] == a
        assert like["to_profile_id"] == b
        assert like["created_at"] == NOW.isoformat()
        assert await like_service.find_like(a, b) == like

    @pytest.mark.asyncio
    async def test_self_like_rejected(
        self, like_service: LikeService, store: InMemoryMatchStore, duo_ids: tuple[str, str]
    ) -> None:
        """Test a profile cannot like itself and nothing is stored."""
        a, _ = duo_ids

        with pytest.raises(SelfLikeError):
            await like_service.record_like(a, a)

        assert store.get_like(a, a) is None

    @pytest.mark.asyncio
    async def test_unknown_target_rejected(self, like_service: LikeService, duo_ids: tuple[str, str]) -> None:
        """Test liking a missing profile raises ProfileNotFoundError."""
        a, _ = duo_ids

        with pytest.raises(ProfileNotFoundError):
            await like_service.record_like(a, str(uuid4()))

    @pytest.mark.asyncio
    async def test_deactivated_target_rejected(
        self, like_service: LikeService, store: InMemoryMatchStore, duo_ids: tuple[str, str]
    ) -> None:
        """Test a deactivated profile cannot be liked and nothing is stored."""
        a, b = duo_ids
        store.update_profile(b, {"is_active": False})

        with pytest.raises(ProfileNotFoundError):
            await like_service.record_like(a, b)

        assert store.get_like(a, b) is None

    @pytest.mark.asyncio
    async def test_duplicate_like_carries_existing(
        self, like_service: LikeService, duo_ids: tuple[str, str]
    ) -> None:
        """Test a repeat like raises DuplicateLikeError with the original like."""
        a, b = duo_ids
        first = await like_service.record_like(a, b)

        with pytest.raises(DuplicateLikeError) as exc_info:
            await like_service.record_like(a, b)

        assert exc_info.value.existing_like == first

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_insert_reported_as_duplicate(self, duo_ids: tuple[str, str]) -> None:
        """Test a unique violation on insert is reported as a duplicate like."""
        a, b = duo_ids
        existing = {"id": "like-1", "from_profile_id": a, "to_profile_id": b}
        store = MagicMock()
        store.get_like.side_effect = [None, existing]
        store.insert_like.side_effect = UniqueViolationError("likes_from_to_key")

        with pytest.raises(DuplicateLikeError) as exc_info:
            await LikeService(store).record_like(a, b)

        assert exc_info.value.existing_like == existing
