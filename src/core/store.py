"""Persistence interface for duo profiles, likes, matches and messages.

Rows cross this boundary as plain dicts shaped like the PostgREST payloads:
identifiers are strings and timestamps are ISO-8601 strings. Uniqueness of
(from, to) likes and of canonical match pairs is enforced here, not in the
services, so concurrent requests serialize on the store alone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from threading import Lock
from typing import Any
from uuid import UUID, uuid4

from src.models import DuoProfile, Like, Match, Message
from src.models.profile import DuoProfileCreate

ProfileId = UUID | str


class StoreError(Exception):
    """Base class for persistence failures."""


class UniqueViolationError(StoreError):
    """Insert rejected because the row already exists."""

    def __init__(self, constraint: str) -> None:
        self.constraint = constraint
        super().__init__(f"Unique constraint violated: {constraint}")


class StoreUnavailableError(StoreError):
    """The backing database could not be reached or failed unexpectedly."""


def canonical_pair(a: ProfileId, b: ProfileId) -> tuple[str, str]:
    """Normalize an unordered pair of profile ids.

    (a, b) and (b, a) always produce the same tuple.
    """
    first, second = sorted((str(a), str(b)))
    return first, second


class MatchStore(ABC):
    """Storage component injected into the matching and messaging services."""

    @abstractmethod
    def ping(self) -> None:
        """Raise StoreUnavailableError if the store cannot serve requests."""

    # Profiles

    @abstractmethod
    def get_profile(self, profile_id: ProfileId) -> DuoProfile | None: ...

    @abstractmethod
    def get_profile_by_user(self, user_id: UUID | str) -> DuoProfile | None: ...

    @abstractmethod
    def get_profiles(self, profile_ids: list[str]) -> list[DuoProfile]: ...

    @abstractmethod
    def create_profile(self, data: DuoProfileCreate) -> DuoProfile:
        """Insert a profile. Raises UniqueViolationError if the user has one."""

    @abstractmethod
    def update_profile(self, profile_id: ProfileId, data: dict[str, Any]) -> DuoProfile | None: ...

    @abstractmethod
    def list_active_profiles(self, exclude_user_id: UUID | str, limit: int) -> list[DuoProfile]: ...

    # Likes

    @abstractmethod
    def get_like(self, from_id: ProfileId, to_id: ProfileId) -> Like | None: ...

    @abstractmethod
    def insert_like(self, from_id: ProfileId, to_id: ProfileId, created_at: datetime) -> Like:
        """Insert a directed like. Raises UniqueViolationError on a repeat."""

    # Matches

    @abstractmethod
    def get_match(self, match_id: UUID | str) -> Match | None: ...

    @abstractmethod
    def get_match_by_pair(self, profile_1_id: str, profile_2_id: str) -> Match | None:
        """Look up a match by its canonical pair."""

    @abstractmethod
    def insert_match(self, profile_1_id: str, profile_2_id: str, created_at: datetime) -> Match:
        """Insert a match for a canonical pair. Raises UniqueViolationError on a repeat."""

    @abstractmethod
    def list_matches_for_profile(self, profile_id: ProfileId) -> list[Match]:
        """Return matched rows involving the profile, newest first."""

    # Messages

    @abstractmethod
    def insert_message(
        self,
        match_id: UUID | str,
        sender_profile_id: ProfileId,
        content: str,
        created_at: datetime,
    ) -> Message: ...

    @abstractmethod
    def list_messages(self, match_id: UUID | str) -> list[Message]:
        """Return a match's messages oldest first, ties in insertion order."""


class InMemoryMatchStore(MatchStore):
    """Thread-safe in-process store for local development and tests."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._profiles: dict[str, dict[str, Any]] = {}
        self._likes: dict[tuple[str, str], dict[str, Any]] = {}
        self._matches: dict[str, dict[str, Any]] = {}
        self._match_pairs: dict[tuple[str, str], str] = {}
        self._messages: dict[str, list[dict[str, Any]]] = {}

    def ping(self) -> None:
        return None

    def get_profile(self, profile_id: ProfileId) -> DuoProfile | None:
        with self._lock:
            row = self._profiles.get(str(profile_id))
            return dict(row) if row else None

    def get_profile_by_user(self, user_id: UUID | str) -> DuoProfile | None:
        with self._lock:
            for row in self._profiles.values():
                if row["user_id"] == str(user_id):
                    return dict(row)
        return None

    def get_profiles(self, profile_ids: list[str]) -> list[DuoProfile]:
        wanted = {str(pid) for pid in profile_ids}
        with self._lock:
            return [dict(row) for pid, row in self._profiles.items() if pid in wanted]

    def create_profile(self, data: DuoProfileCreate) -> DuoProfile:
        with self._lock:
            user_id = str(data["user_id"])
            if any(row["user_id"] == user_id for row in self._profiles.values()):
                raise UniqueViolationError("duo_profiles_user_id_key")

            row = {
                "ages": None,
                "location": None,
                "bio": None,
                "interests": [],
                "photos": [],
                "is_active": True,
                **data,
                "id": str(uuid4()),
                "user_id": user_id,
            }
            self._profiles[row["id"]] = row
            return dict(row)

    def update_profile(self, profile_id: ProfileId, data: dict[str, Any]) -> DuoProfile | None:
        with self._lock:
            row = self._profiles.get(str(profile_id))
            if row is None:
                return None
            row.update(data)
            return dict(row)

    def list_active_profiles(self, exclude_user_id: UUID | str, limit: int) -> list[DuoProfile]:
        with self._lock:
            rows = [
                dict(row)
                for row in self._profiles.values()
                if row["is_active"] and row["user_id"] != str(exclude_user_id)
            ]
        return rows[:limit]

    def get_like(self, from_id: ProfileId, to_id: ProfileId) -> Like | None:
        with self._lock:
            row = self._likes.get((str(from_id), str(to_id)))
            return dict(row) if row else None

    def insert_like(self, from_id: ProfileId, to_id: ProfileId, created_at: datetime) -> Like:
        key = (str(from_id), str(to_id))
        with self._lock:
            if key in self._likes:
                raise UniqueViolationError("likes_from_to_key")
            row = {
                "id": str(uuid4()),
                "from_profile_id": key[0],
                "to_profile_id": key[1],
                "created_at": created_at.isoformat(),
            }
            self._likes[key] = row
            return dict(row)

    def get_match(self, match_id: UUID | str) -> Match | None:
        with self._lock:
            row = self._matches.get(str(match_id))
            return dict(row) if row else None

    def get_match_by_pair(self, profile_1_id: str, profile_2_id: str) -> Match | None:
        with self._lock:
            match_id = self._match_pairs.get((profile_1_id, profile_2_id))
            return dict(self._matches[match_id]) if match_id else None

    def insert_match(self, profile_1_id: str, profile_2_id: str, created_at: datetime) -> Match:
        if profile_1_id >= profile_2_id:
            raise ValueError("Match pair must be canonical and distinct")

        with self._lock:
            if (profile_1_id, profile_2_id) in self._match_pairs:
                raise UniqueViolationError("matches_pair_key")
            row = {
                "id": str(uuid4()),
                "profile_1_id": profile_1_id,
                "profile_2_id": profile_2_id,
                "is_matched": True,
                "created_at": created_at.isoformat(),
            }
            self._matches[row["id"]] = row
            self._match_pairs[(profile_1_id, profile_2_id)] = row["id"]
            return dict(row)

    def list_matches_for_profile(self, profile_id: ProfileId) -> list[Match]:
        pid = str(profile_id)
        with self._lock:
            rows = [
                dict(row)
                for row in self._matches.values()
                if row["is_matched"] and pid in (row["profile_1_id"], row["profile_2_id"])
            ]
        return sorted(rows, key=lambda row: datetime.fromisoformat(row["created_at"]), reverse=True)

    def insert_message(
        self,
        match_id: UUID | str,
        sender_profile_id: ProfileId,
        content: str,
        created_at: datetime,
    ) -> Message:
        row = {
            "id": str(uuid4()),
            "match_id": str(match_id),
            "sender_profile_id": str(sender_profile_id),
            "content": content,
            "created_at": created_at.isoformat(),
        }
        with self._lock:
            self._messages.setdefault(row["match_id"], []).append(row)
        return dict(row)

    def list_messages(self, match_id: UUID | str) -> list[Message]:
        with self._lock:
            rows = [dict(row) for row in self._messages.get(str(match_id), [])]
        # sorted() is stable, so equal timestamps keep append order
        return sorted(rows, key=lambda row: datetime.fromisoformat(row["created_at"]))
