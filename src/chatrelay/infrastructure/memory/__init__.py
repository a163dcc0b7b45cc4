"""In-memory storage."""

from chatrelay.infrastructure.memory.conversation_store import (
    InMemoryConversationStore,
)

__all__ = ["InMemoryConversationStore"]
