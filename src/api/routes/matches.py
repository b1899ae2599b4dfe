"""Match and message thread API routes."""

from uuid import UUID

from fastapi import APIRouter, status

from src.api.deps import CurrentProfile, RateLimit, Store
from src.core.config import get_settings
from src.schemas.match import MatchWithProfileResponse
from src.schemas.message import MessageCreate, MessageResponse
from src.services.match_service import MatchService
from src.services.message_service import MessageService

router = APIRouter(prefix="/matches", tags=["matches"])

THREAD_ERRORS = {
    404: {"description": "Match not found, or caller is not part of it"},
}


@router.get(
    "",
    response_model=list[MatchWithProfileResponse],
    summary="List the caller's matches",
    description="Newest first, each with the other duo's profile.",
)
async def list_matches(profile: CurrentProfile, store: Store) -> list[MatchWithProfileResponse]:
    """List matches for the authenticated user's duo profile."""
    matches = await MatchService(store).list_matches_for_profile(profile["id"])
    return [MatchWithProfileResponse.model_validate(match) for match in matches]


@router.get(
    "/{match_id}/messages",
    response_model=list[MessageResponse],
    summary="List messages in a match",
    responses=THREAD_ERRORS,
)
async def list_messages(
    match_id: UUID,
    profile: CurrentProfile,
    store: Store,
) -> list[MessageResponse]:
    """Return the match's thread, oldest first."""
    messages = await MessageService(store).list_messages(match_id, profile["id"])
    return [MessageResponse.model_validate(message) for message in messages]


@router.post(
    "/{match_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message in a match",
    responses={**THREAD_ERRORS, 422: {"description": "Empty or too long message"}},
)
async def post_message(
    match_id: UUID,
    data: MessageCreate,
    profile: CurrentProfile,
    store: Store,
    _: RateLimit,
) -> MessageResponse:
    """Append a message from the caller to the match's thread."""
    service = MessageService(store, max_length=get_settings().max_message_length)
    message = await service.post_message(match_id, profile["id"], data.content)
    return MessageResponse.model_validate(message)
