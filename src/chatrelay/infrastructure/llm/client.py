"""LLM client wrapper."""

import logging
from typing import Any

import litellm
from litellm.exceptions import AuthenticationError, RateLimitError

from chatrelay.config import OpenAIConfig
from chatrelay.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
)

logger = logging.getLogger(__name__)


def _translate_error(e: Exception) -> LLMError:
    """Convert a LiteLLM exception to an LLMError."""
    if isinstance(e, AuthenticationError):
        logger.error("LLM authentication error: %s", e)
        return LLMAuthenticationError(str(e))
    if isinstance(e, RateLimitError):
        logger.warning("LLM rate limit exceeded: %s", e)
        return LLMRateLimitError(str(e))
    logger.error("LLM error: %s", e)
    return LLMError(str(e))


class LLMClient:
    """LiteLLM wrapper client.

    This class provides a simplified interface to LiteLLM for an
    OpenAI-compatible endpoint, applying credentials and handling errors.
    Every call is a single attempt; retries are disabled.
    """

    def __init__(self, config: OpenAIConfig) -> None:
        """Initialize the client.

        Args:
            config: API key and base URL.
        """
        self._config = config

    def _connection_params(self) -> dict[str, Any]:
        return {
            "api_key": self._config.api_key,
            "api_base": self._config.base_url,
            "custom_llm_provider": "openai",
            "max_retries": 0,
        }

    async def complete(
        self,
        model: str,
        messages: list[dict[str, Any]],
        **kwargs: Any,
    ) -> str:
        """Execute chat completion.

        Args:
            model: Model name.
            messages: OpenAI-format message list.
                [{"role": "system", "content": "..."}, ...]
            **kwargs: Additional parameters (max_completion_tokens, ...).

        Returns:
            Generated text.

        Raises:
            LLMAuthenticationError: Invalid API key.
            LLMRateLimitError: Rate limit exceeded.
            LLMError: Other API errors, or a response without choices.
        """
        params = {
            "model": model,
            "messages": messages,
            **self._connection_params(),
            **kwargs,
        }

        logger.debug("LLM request: model=%s", model)

        try:
            response = await litellm.acompletion(**params)
        except Exception as e:
            raise _translate_error(e) from e

        if not response.choices:
            logger.error("LLM returned no choices")
            raise LLMError("LLM returned empty response")

        content = response.choices[0].message.content
        if content is None:
            logger.error("LLM returned a choice without content")
            raise LLMError("LLM returned empty response")

        logger.debug("LLM response received")
        return content

    async def speech(
        self,
        model: str,
        voice: str,
        text: str,
        response_format: str | None = None,
    ) -> bytes:
        """Execute text-to-speech.

        Args:
            model: Speech model name.
            voice: Voice preset.
            text: Text to synthesize.
            response_format: Audio format, or None for the API default.

        Returns:
            Raw audio bytes.

        Raises:
            LLMError: If the call fails.
        """
        params: dict[str, Any] = {
            "model": model,
            "voice": voice,
            "input": text,
            **self._connection_params(),
        }
        if response_format:
            params["response_format"] = response_format

        logger.debug("Speech request: model=%s, voice=%s", model, voice)

        try:
            response = await litellm.aspeech(**params)
        except Exception as e:
            raise _translate_error(e) from e

        return response.content
