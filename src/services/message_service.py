"""Message thread business logic service."""

import logging
from typing import Any
from uuid import UUID

from src.api.middleware.error_handler import (
    EmptyContentError,
    MatchNotFoundError,
    NotAParticipantError,
    ValidationError,
)
from src.core.clock import Clock, utc_now
from src.core.store import MatchStore

logger = logging.getLogger(__name__)


class MessageService:
    """Service for the per-match message thread.

    Only the two profiles of a match may read or write its thread.
    """

    DEFAULT_MAX_LENGTH = 2000

    def __init__(
        self,
        store: MatchStore,
        clock: Clock = utc_now,
        max_length: int | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.max_length = max_length or self.DEFAULT_MAX_LENGTH

    def _get_match_for_participant(self, match_id: UUID | str, profile_id: UUID | str) -> dict[str, Any]:
        match = self.store.get_match(match_id)
        if not match or not match.get("is_matched", True):
            raise MatchNotFoundError()

        if str(profile_id) not in (match["profile_1_id"], match["profile_2_id"]):
            raise NotAParticipantError()

        return match

    async def post_message(
        self,
        match_id: UUID | str,
        sender_profile_id: UUID | str,
        content: str,
    ) -> dict[str, Any]:
        """Append a message to a match's thread.

        Args:
            match_id: The match's UUID.
            sender_profile_id: Profile sending the message.
            content: Message text; stored trimmed.

        Returns:
            dict: The created message data.

        Raises:
            MatchNotFoundError: If the match does not exist.
            NotAParticipantError: If the sender is not in the match.
            EmptyContentError: If content is blank after trimming.
        """
        self._get_match_for_participant(match_id, sender_profile_id)

        text = content.strip()
        if not text:
            raise EmptyContentError()
        if len(text) > self.max_length:
            raise ValidationError(
                f"Message exceeds {self.max_length} characters",
                error_type="message_too_long",
            )

        message = self.store.insert_message(match_id, sender_profile_id, text, self.clock())
        logger.debug("Profile %s posted message %s to match %s", sender_profile_id, message["id"], match_id)
        return message

    async def list_messages(self, match_id: UUID | str, requesting_profile_id: UUID | str) -> list[dict[str, Any]]:
        """Get a match's messages, oldest first.

        Raises:
            MatchNotFoundError: If the match does not exist.
            NotAParticipantError: If the requester is not in the match.
        """
        self._get_match_for_participant(match_id, requesting_profile_id)
        return self.store.list_messages(match_id)
