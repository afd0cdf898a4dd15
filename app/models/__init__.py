"""Domain models package."""

from app.models.message import InboundMessage, UserID
from app.models.note import Note

__all__ = [
    "InboundMessage",
    "Note",
    "UserID",
]
