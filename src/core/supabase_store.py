"""Supabase (PostgREST) implementation of the match store."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

import httpx
from postgrest.exceptions import APIError as PostgrestAPIError
from supabase import Client

from src.core.store import MatchStore, ProfileId, StoreUnavailableError, UniqueViolationError
from src.models import DuoProfile, Like, Match, Message
from src.models.profile import DuoProfileCreate

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

PROFILES_TABLE = "duo_profiles"
LIKES_TABLE = "likes"
MATCHES_TABLE = "matches"
MESSAGES_TABLE = "messages"


class SupabaseMatchStore(MatchStore):
    """Match store backed by Supabase tables.

    The unique indexes declared in supabase/migrations turn concurrent
    duplicate inserts into UniqueViolationError.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def _execute(self, query: Any, constraint: str | None = None) -> Any:
        """Execute a PostgREST query, translating failures into store errors.

        Args:
            query: A built PostgREST request.
            constraint: Constraint name to report if the insert collides.

        Returns:
            The PostgREST response.
        """
        try:
            return query.execute()
        except PostgrestAPIError as e:
            if constraint and e.code == UNIQUE_VIOLATION:
                raise UniqueViolationError(constraint) from e
            logger.error("Database error: %s (%s)", e.message, e.code)
            raise StoreUnavailableError(f"Database error: {e.message}") from e
        except httpx.HTTPError as e:
            logger.error("Database connection failed: %s", e)
            raise StoreUnavailableError(f"Database connection failed: {e}") from e

    @staticmethod
    def _first(response: Any) -> dict[str, Any] | None:
        if response and response.data:
            return response.data[0] if isinstance(response.data, list) else response.data
        return None

    def ping(self) -> None:
        self._execute(self.client.table(PROFILES_TABLE).select("id").limit(1))

    # Profiles

    def get_profile(self, profile_id: ProfileId) -> DuoProfile | None:
        response = self._execute(
            self.client.table(PROFILES_TABLE)
            .select("*")
            .eq("id", str(profile_id))
            .limit(1)
        )
        return self._first(response)

    def get_profile_by_user(self, user_id: UUID | str) -> DuoProfile | None:
        response = self._execute(
            self.client.table(PROFILES_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
        )
        return self._first(response)

    def get_profiles(self, profile_ids: list[str]) -> list[DuoProfile]:
        if not profile_ids:
            return []
        response = self._execute(
            self.client.table(PROFILES_TABLE)
            .select("*")
            .in_("id", [str(pid) for pid in profile_ids])
        )
        return response.data or []

    def create_profile(self, data: DuoProfileCreate) -> DuoProfile:
        payload = {**data, "user_id": str(data["user_id"])}
        response = self._execute(
            self.client.table(PROFILES_TABLE).insert(payload),
            constraint="duo_profiles_user_id_key",
        )
        return response.data[0]

    def update_profile(self, profile_id: ProfileId, data: dict[str, Any]) -> DuoProfile | None:
        response = self._execute(
            self.client.table(PROFILES_TABLE)
            .update(data)
            .eq("id", str(profile_id))
        )
        return self._first(response)

    def list_active_profiles(self, exclude_user_id: UUID | str, limit: int) -> list[DuoProfile]:
        response = self._execute(
            self.client.table(PROFILES_TABLE)
            .select("*")
            .eq("is_active", True)
            .neq("user_id", str(exclude_user_id))
            .limit(limit)
        )
        return response.data or []

    # Likes

    def get_like(self, from_id: ProfileId, to_id: ProfileId) -> Like | None:
        response = self._execute(
            self.client.table(LIKES_TABLE)
            .select("*")
            .eq("from_profile_id", str(from_id))
            .eq("to_profile_id", str(to_id))
            .limit(1)
        )
        return self._first(response)

    def insert_like(self, from_id: ProfileId, to_id: ProfileId, created_at: datetime) -> Like:
        response = self._execute(
            self.client.table(LIKES_TABLE).insert(
                {
                    "from_profile_id": str(from_id),
                    "to_profile_id": str(to_id),
                    "created_at": created_at.isoformat(),
                }
            ),
            constraint="likes_from_to_key",
        )
        return response.data[0]

    # Matches

    def get_match(self, match_id: UUID | str) -> Match | None:
        response = self._execute(
            self.client.table(MATCHES_TABLE)
            .select("*")
            .eq("id", str(match_id))
            .limit(1)
        )
        return self._first(response)

    def get_match_by_pair(self, profile_1_id: str, profile_2_id: str) -> Match | None:
        response = self._execute(
            self.client.table(MATCHES_TABLE)
            .select("*")
            .eq("profile_1_id", profile_1_id)
            .eq("profile_2_id", profile_2_id)
            .limit(1)
        )
        return self._first(response)

    def insert_match(self, profile_1_id: str, profile_2_id: str, created_at: datetime) -> Match:
        response = self._execute(
            self.client.table(MATCHES_TABLE).insert(
                {
                    "profile_1_id": profile_1_id,
                    "profile_2_id": profile_2_id,
                    "is_matched": True,
                    "created_at": created_at.isoformat(),
                }
            ),
            constraint="matches_pair_key",
        )
        return response.data[0]

    def list_matches_for_profile(self, profile_id: ProfileId) -> list[Match]:
        pid = str(profile_id)
        response = self._execute(
            self.client.table(MATCHES_TABLE)
            .select("*")
            .eq("is_matched", True)
            .or_(f"profile_1_id.eq.{pid},profile_2_id.eq.{pid}")
            .order("created_at", desc=True)
        )
        return response.data or []

    # Messages

    def insert_message(
        self,
        match_id: UUID | str,
        sender_profile_id: ProfileId,
        content: str,
        created_at: datetime,
    ) -> Message:
        response = self._execute(
            self.client.table(MESSAGES_TABLE).insert(
                {
                    "match_id": str(match_id),
                    "sender_profile_id": str(sender_profile_id),
                    "content": content,
                    "created_at": created_at.isoformat(),
                }
            )
        )
        return response.data[0]

    def list_messages(self, match_id: UUID | str) -> list[Message]:
        # seq is an identity column, so it breaks created_at ties by insert order
        response = self._execute(
            self.client.table(MESSAGES_TABLE)
            .select("*")
            .eq("match_id", str(match_id))
            .order("created_at", desc=False)
            .order("seq", desc=False)
        )
        return response.data or []
