"""Database model type definitions."""

from src.models.like import Like
from src.models.match import Match
from src.models.message import Message
from src.models.profile import DuoProfile

__all__ = [
    "DuoProfile",
    "Like",
    "Match",
    "Message",
]
