"""FastAPI dependency injection functions."""

from typing import Annotated, Any

from fastapi import Depends, Header, HTTPException, Request, status

from src.api.middleware.auth import AuthError, AuthErrorCode, decode_jwt
from src.api.middleware.error_handler import RateLimitError
from src.core.rate_limiter import InMemoryRateLimiter
from src.core.store import MatchStore
from src.schemas.auth import UserContext
from src.services.profile_service import DuoProfileService


async def get_current_user(
    authorization: Annotated[str, Header(description="Bearer token")] = "",
) -> UserContext:
    """Extract and validate the current user from the Authorization header.

    Args:
        authorization: The Authorization header value (Bearer token).

    Returns:
        UserContext: The authenticated user's context.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired.
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format. Expected: Bearer <token>",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_jwt(parts[1])
        return payload.to_user_context()

    except AuthError as e:
        detail = "Token has expired" if e.code == AuthErrorCode.TOKEN_EXPIRED else e.message
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def get_store(request: Request) -> MatchStore:
    """Return the store built by the application lifespan."""
    return request.app.state.store


Store = Annotated[MatchStore, Depends(get_store)]


async def get_current_profile(user: CurrentUser, store: Store) -> dict[str, Any]:
    """Resolve the authenticated user to their duo profile.

    Raises:
        ProfileRequiredError: If the user has not created a profile.
    """
    return await DuoProfileService(store).get_profile_for_user(user.user_id)


CurrentProfile = Annotated[dict[str, Any], Depends(get_current_profile)]


async def check_rate_limit(request: Request, user: CurrentUser) -> None:
    """Apply the per-user limit on likes and message posts.

    Raises:
        RateLimitError: If the user has exceeded the limit.
    """
    limiter: InMemoryRateLimiter = request.app.state.rate_limiter
    allowed, _, retry_after = limiter.check_and_increment(f"user:{user.user_id}")

    if not allowed:
        raise RateLimitError(
            message="Rate limit exceeded. Please slow down.",
            retry_after=retry_after,
            limit=limiter.config.max_requests,
        )


RateLimit = Annotated[None, Depends(check_rate_limit)]
