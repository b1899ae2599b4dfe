"""Like API routes."""

from fastapi import APIRouter, Response, status

from src.api.deps import CurrentProfile, RateLimit, Store
from src.schemas.like import LikeCreate, LikeResponse, LikeResultResponse, LikeStatus
from src.schemas.match import MatchResponse
from src.services.match_service import MatchService

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post(
    "",
    response_model=LikeResultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like a duo profile",
    responses={
        200: {"description": "Profile was already liked; nothing new recorded"},
        201: {"description": "Like recorded; status tells whether it produced a match"},
        400: {"description": "Tried to like own profile"},
        404: {"description": "Liked profile not found"},
    },
)
async def like_profile(
    data: LikeCreate,
    profile: CurrentProfile,
    store: Store,
    response: Response,
    _: RateLimit,
) -> LikeResultResponse:
    """Like another duo and report whether it is a match.

    A repeat like answers 200 with status already_liked instead of an error.
    """
    outcome = await MatchService(store).like_profile(profile["id"], data.to_profile_id)

    if outcome.status == LikeStatus.ALREADY_LIKED:
        response.status_code = status.HTTP_200_OK

    return LikeResultResponse(
        status=outcome.status,
        like=LikeResponse.model_validate(outcome.like),
        match=MatchResponse.model_validate(outcome.match) if outcome.match else None,
    )
