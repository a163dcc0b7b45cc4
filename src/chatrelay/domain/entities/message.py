"""Message entity."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Speaker of a conversation turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One stored conversation turn.

    Attributes:
        role: Who produced the turn.
        content: Turn text. Image payloads are never stored, only a marker.
        timestamp: When the turn was created (timezone-aware).
    """

    role: Role
    content: str
    timestamp: datetime
