"""Domain repositories."""

from chatrelay.domain.repositories.conversation_store import ConversationStore

__all__ = ["ConversationStore"]
