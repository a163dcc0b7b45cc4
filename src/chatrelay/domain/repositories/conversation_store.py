"""Conversation store protocol."""

from datetime import timedelta
from typing import Protocol

from chatrelay.domain.entities import Message


class ConversationStore(Protocol):
    """Per-conversation append log with bounded-freshness reads.

    Each call is atomic with respect to every other call on the store.
    """

    def append(self, conversation_id: int, message: Message) -> None:
        """Append a message to the end of a conversation.

        The conversation is created on first append.

        Args:
            conversation_id: Conversation (chat) ID.
            message: Message to store.
        """
        ...

    def fresh_messages(
        self,
        conversation_id: int,
        max_count: int,
        max_age: timedelta,
    ) -> list[Message]:
        """Return the recent tail of a conversation.

        Messages older than ``max_age`` are dropped, then only the last
        ``max_count`` of the rest are kept.

        Args:
            conversation_id: Conversation (chat) ID.
            max_count: Maximum number of messages to return.
            max_age: Maximum message age at read time.

        Returns:
            New list of messages, oldest first. Empty for unknown conversations.
        """
        ...
