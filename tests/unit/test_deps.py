"""Unit tests for FastAPI dependency injection functions."""

import time
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import HTTPException

from src.api.deps import check_rate_limit, get_current_profile, get_current_user, get_store
from src.api.middleware.auth import AuthError, AuthErrorCode
from src.api.middleware.error_handler import ProfileRequiredError, RateLimitError
from src.core.rate_limiter import InMemoryRateLimiter, RateLimitConfig
from src.core.store import InMemoryMatchStore
from src.schemas.auth import TokenPayload, UserContext


class TestGetCurrentUser:
    """Tests for get_current_user dependency."""

    @pytest.mark.asyncio
    @patch("src.api.deps.decode_jwt")
    async def test_extracts_user_context_correctly(self, mock_decode: MagicMock) -> None:
        """Test get_current_user extracts UserContext from valid token."""
        mock_decode.return_value = TokenPayload(
            sub="550e8400-e29b-41d4-a716-446655440000",
            email="test@example.com",
            role="authenticated",
            exp=int(time.time()) + 3600,
            iat=int(time.time()),
        )

        user = await get_current_user("Bearer valid-token")

        assert isinstance(user, UserContext)
        assert str(user.user_id) == "550e8400-e29b-41d4-a716-446655440000"
        mock_decode.assert_called_once_with("valid-token")

    @pytest.mark.asyncio
    async def test_missing_header_raises_401(self) -> None:
        """Test that a missing Authorization header is rejected."""
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_scheme_raises_401(self) -> None:
        """Test that a non-Bearer header is rejected."""
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("Basic dXNlcjpwYXNz")

        assert exc_info.value.status_code == 401
        assert "Bearer" in exc_info.value.detail

    @pytest.mark.asyncio
    @patch("src.api.deps.decode_jwt")
    async def test_expired_token_raises_401(self, mock_decode: MagicMock) -> None:
        """Test that an expired token yields a 401 with a clear message."""
        mock_decode.side_effect = AuthError("Token has expired", AuthErrorCode.TOKEN_EXPIRED)

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("Bearer expired")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"


class TestGetCurrentProfile:
    """Tests for get_current_profile dependency."""

    @pytest.mark.asyncio
    async def test_returns_callers_profile(self) -> None:
        """Test the caller's duo profile is resolved from their user id."""
        store = InMemoryMatchStore()
        user_id = uuid4()
        created = store.create_profile({"user_id": user_id, "couple_name": "Sam & Alex"})

        profile = await get_current_profile(UserContext(user_id=user_id), store)

        assert profile["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_user_without_profile_raises(self) -> None:
        """Test that acting without a duo profile is refused."""
        with pytest.raises(ProfileRequiredError):
            await get_current_profile(UserContext(user_id=uuid4()), InMemoryMatchStore())


class TestGetStore:
    """Tests for get_store dependency."""

    def test_returns_store_from_app_state(self) -> None:
        """Test the store is taken from the application state."""
        request = MagicMock()
        store = InMemoryMatchStore()
        request.app.state.store = store

        assert get_store(request) is store


class TestCheckRateLimit:
    """Tests for check_rate_limit dependency."""

    @pytest.mark.asyncio
    async def test_raises_when_limit_exceeded(self) -> None:
        """Test that the request past the limit raises RateLimitError."""
        request = MagicMock()
        request.app.state.rate_limiter = InMemoryRateLimiter(RateLimitConfig(max_requests=2))
        user = UserContext(user_id=uuid4())

        await check_rate_limit(request, user)
        await check_rate_limit(request, user)

        with pytest.raises(RateLimitError) as exc_info:
            await check_rate_limit(request, user)

        assert exc_info.value.limit == 2
        assert exc_info.value.retry_after > 0

    @pytest.mark.asyncio
    async def test_limits_are_per_user(self) -> None:
        """Test one user's usage does not count against another."""
        request = MagicMock()
        request.app.state.rate_limiter = InMemoryRateLimiter(RateLimitConfig(max_requests=1))

        await check_rate_limit(request, UserContext(user_id=uuid4()))
        await check_rate_limit(request, UserContext(user_id=uuid4()))
