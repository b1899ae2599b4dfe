"""Duo profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from src.api.deps import CurrentUser, Store
from src.core.config import get_settings
from src.schemas.profile import (
    DuoProfileCreate,
    DuoProfileResponse,
    DuoProfileSummary,
    DuoProfileUpdate,
)
from src.services.profile_service import DuoProfileService

router = APIRouter(prefix="/duo-profiles", tags=["duo-profiles"])


@router.post(
    "",
    response_model=DuoProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create the caller's duo profile",
    responses={409: {"description": "User already has a duo profile"}},
)
async def create_profile(
    data: DuoProfileCreate,
    user: CurrentUser,
    store: Store,
) -> DuoProfileResponse:
    """Create a duo profile owned by the authenticated user."""
    profile = await DuoProfileService(store).create_profile(user.user_id, data)
    return DuoProfileResponse.model_validate(profile)


@router.get(
    "/me",
    response_model=DuoProfileResponse,
    summary="Get current user's duo profile",
)
async def get_my_profile(user: CurrentUser, store: Store) -> DuoProfileResponse:
    """Get the authenticated user's duo profile.

    Raises:
        ProfileRequiredError: 400 if the user has no profile yet.
    """
    profile = await DuoProfileService(store).get_profile_for_user(user.user_id)
    return DuoProfileResponse.model_validate(profile)


@router.put(
    "/me",
    response_model=DuoProfileResponse,
    summary="Update current user's duo profile",
    description="Partial update; omitted fields are left unchanged. Set is_active=false to stop appearing in browse.",
)
async def update_my_profile(
    data: DuoProfileUpdate,
    user: CurrentUser,
    store: Store,
) -> DuoProfileResponse:
    """Update the authenticated user's duo profile."""
    profile = await DuoProfileService(store).update_profile(user.user_id, data)
    return DuoProfileResponse.model_validate(profile)


@router.get(
    "/browse",
    response_model=list[DuoProfileSummary],
    summary="Browse active duo profiles",
    description="Active profiles other than the caller's own. No ranking is applied.",
)
async def browse_profiles(
    user: CurrentUser,
    store: Store,
    limit: int | None = Query(default=None, ge=1, le=100, description="Maximum profiles to return"),
) -> list[DuoProfileSummary]:
    """List profiles the caller can like."""
    profiles = await DuoProfileService(store).browse_profiles(
        user.user_id,
        limit or get_settings().browse_page_size,
    )
    return [DuoProfileSummary.model_validate(profile) for profile in profiles]


@router.get(
    "/{profile_id}",
    response_model=DuoProfileSummary,
    summary="Get a duo profile",
)
async def get_profile(profile_id: UUID, user: CurrentUser, store: Store) -> DuoProfileSummary:
    """Get another duo's public profile."""
    profile = await DuoProfileService(store).get_profile(profile_id)
    return DuoProfileSummary.model_validate(profile)
