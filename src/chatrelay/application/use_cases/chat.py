"""Chat use case."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from chatrelay.config import ChatConfig
from chatrelay.domain.entities import (
    ChatInput,
    CompletionMessage,
    CompletionRequest,
    Message,
    Role,
)
from chatrelay.domain.exceptions import EmptyMessageError
from chatrelay.domain.repositories import ConversationStore
from chatrelay.domain.services import CompletionGateway, format_stored_content

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatUseCase:
    """Use case for answering a chat message with conversation context.

    Concurrent calls for the same conversation are not serialized. Each
    call reads the history available at that moment, so two overlapping
    requests may each miss the other's user turn.
    """

    def __init__(
        self,
        store: ConversationStore,
        gateway: CompletionGateway,
        config: ChatConfig,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Conversation history store.
            gateway: Completion gateway.
            config: Model, prompt and context window settings.
            now: Clock used to timestamp stored turns.
        """
        self._store = store
        self._gateway = gateway
        self._config = config
        self._now = now

    async def handle_message(self, conversation_id: int, chat_input: ChatInput) -> str:
        """Generate a reply and record both turns.

        Processing flow:
        1. Reject input with neither text nor images
        2. Read the fresh history, then store the user turn
        3. Build system prompt + history + new user turn (with images)
        4. Call the completion gateway
        5. Store and return the reply

        Args:
            conversation_id: Conversation (chat) ID.
            chat_input: The user's input.

        Returns:
            Reply text.

        Raises:
            EmptyMessageError: If the input is empty.
            UpstreamError: If the completion call fails. The user turn stays stored.
        """
        if chat_input.is_empty():
            raise EmptyMessageError()

        user_message = Message(
            role=Role.USER,
            content=format_stored_content(chat_input),
            timestamp=self._now(),
        )

        history = self._store.fresh_messages(
            conversation_id,
            self._config.context_message_limit,
            self._config.context_ttl,
        )
        self._store.append(conversation_id, user_message)

        logger.debug(
            "Conversation %s: %d history messages, %d images",
            conversation_id,
            len(history),
            len(chat_input.images),
        )

        request = CompletionRequest(
            model=self._config.model,
            messages=self._build_messages(history, chat_input),
            max_completion_tokens=self._config.max_tokens,
        )
        response = await self._gateway.complete(request)

        self._store.append(
            conversation_id,
            Message(role=Role.ASSISTANT, content=response, timestamp=self._now()),
        )
        return response

    def _build_messages(
        self, history: list[Message], chat_input: ChatInput
    ) -> list[CompletionMessage]:
        messages = [
            CompletionMessage(role=Role.SYSTEM, text=self._config.system_prompt)
        ]
        # Stored history never carries images.
        messages.extend(CompletionMessage(role=m.role, text=m.content) for m in history)
        messages.append(
            CompletionMessage(
                role=Role.USER,
                text=chat_input.text,
                images=[image.data_url for image in chat_input.images],
            )
        )
        return messages
