"""In-memory implementation of ConversationStore."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from chatrelay.domain.entities import Message

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryConversationStore:
    """Process-local conversation history.

    A single lock guards the whole mapping, so every append and read is
    atomic. Two handlers working on the same conversation are not
    serialized beyond that: each may read a history that misses the
    other's in-flight turn.

    Reads are bounded by count and age. Writes only prune when a
    ``retention`` window is given; without one a conversation grows for
    the lifetime of the process. With a retention window, reads asking
    for a ``max_age`` longer than ``retention`` only see messages younger
    than ``retention``.
    """

    def __init__(
        self,
        retention: timedelta | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the store.

        Args:
            retention: Drop messages older than this on append. None keeps all.
            now: Clock used for age checks.
        """
        self._conversations: dict[int, list[Message]] = {}
        self._lock = threading.Lock()
        self._retention = retention
        self._now = now

    def append(self, conversation_id: int, message: Message) -> None:
        """Append a message to the end of a conversation.

        Args:
            conversation_id: Conversation (chat) ID.
            message: Message to store.
        """
        with self._lock:
            history = self._conversations.setdefault(conversation_id, [])
            history.append(message)
            if self._retention is not None:
                self._prune(conversation_id, history)

    def fresh_messages(
        self,
        conversation_id: int,
        max_count: int,
        max_age: timedelta,
    ) -> list[Message]:
        """Return the recent tail of a conversation.

        Args:
            conversation_id: Conversation (chat) ID.
            max_count: Maximum number of messages to return.
            max_age: Maximum message age at read time.

        Returns:
            New list of messages, oldest first.
        """
        if max_count <= 0:
            return []

        with self._lock:
            history = self._conversations.get(conversation_id)
            if not history:
                return []

            cutoff = self._now() - max_age
            fresh = [m for m in history if m.timestamp >= cutoff]

        return fresh[-max_count:]

    def conversation_count(self) -> int:
        """Number of conversations seen so far."""
        with self._lock:
            return len(self._conversations)

    def message_count(self, conversation_id: int) -> int:
        """Number of messages currently held for a conversation."""
        with self._lock:
            return len(self._conversations.get(conversation_id, ()))

    def _prune(self, conversation_id: int, history: list[Message]) -> None:
        # Caller holds the lock. Stops at the first fresh message; an older
        # one appended later by a concurrent handler is left for reads to filter.
        cutoff = self._now() - self._retention  # type: ignore[operator]
        expired = 0
        for message in history:
            if message.timestamp >= cutoff:
                break
            expired += 1
        if expired:
            del history[:expired]
            logger.debug(
                "Pruned %d expired messages from conversation %s",
                expired,
                conversation_id,
            )
