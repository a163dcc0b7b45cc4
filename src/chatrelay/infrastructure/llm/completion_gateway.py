"""LiteLLM completion gateway."""

import logging
from typing import Any

from chatrelay.domain.entities import CompletionMessage, CompletionRequest
from chatrelay.infrastructure.llm.client import LLMClient

logger = logging.getLogger(__name__)


def to_api_messages(messages: list[CompletionMessage]) -> list[dict[str, Any]]:
    """Convert completion messages to the OpenAI chat format.

    Messages without images keep plain string content. Messages with images
    become multi-part content: a text part (when the text is not blank)
    followed by one ``image_url`` part per image.

    Args:
        messages: Ordered completion messages.

    Returns:
        OpenAI-format message list.
    """
    api_messages: list[dict[str, Any]] = []
    for message in messages:
        if not message.images:
            api_messages.append({"role": message.role.value, "content": message.text})
            continue

        parts: list[dict[str, Any]] = []
        if message.text.strip():
            parts.append({"type": "text", "text": message.text})
        for url in message.images:
            parts.append(
                {"type": "image_url", "image_url": {"url": url, "detail": "auto"}}
            )
        api_messages.append({"role": message.role.value, "content": parts})
    return api_messages


class LiteLLMCompletionGateway:
    """LiteLLM-based CompletionGateway implementation."""

    def __init__(
        self,
        client: LLMClient,
        *,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the gateway.

        Args:
            client: LLMClient instance.
            debug_llm_messages: If True, log LLM messages at INFO level.
        """
        self._client = client
        self._debug_llm_messages = debug_llm_messages

    async def complete(self, request: CompletionRequest) -> str:
        """Generate a reply.

        Args:
            request: Model, ordered messages and token limit.

        Returns:
            Generated response text.

        Raises:
            LLMError: If response generation fails.
        """
        messages = to_api_messages(request.messages)

        if self._should_log():
            self._log_messages(request.messages)

        response = await self._client.complete(
            request.model,
            messages,
            max_completion_tokens=request.max_completion_tokens,
        )

        if self._should_log():
            self._log_response(response)

        return response

    def _should_log(self) -> bool:
        """Check if logging should occur."""
        return self._debug_llm_messages or logger.isEnabledFor(logging.DEBUG)

    def _log_messages(self, messages: list[CompletionMessage]) -> None:
        """Log LLM request messages. Image data is summarized, not logged."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Request Messages ===")
        for i, msg in enumerate(messages):
            log_func("[%d] role=%s images=%d", i, msg.role.value, len(msg.images))
            log_func("    content: %s", msg.text)
        log_func("=== End of Messages ===")

    def _log_response(self, response: str) -> None:
        """Log LLM response."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Response ===")
        log_func("response: %s", response)
        log_func("=== End of Response ===")
