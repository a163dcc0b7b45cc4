"""LLM integration."""

from chatrelay.infrastructure.llm.client import LLMClient
from chatrelay.infrastructure.llm.completion_gateway import LiteLLMCompletionGateway
from chatrelay.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMError,
    LLMRateLimitError,
)
from chatrelay.infrastructure.llm.image_gateway import OpenAIImageGateway
from chatrelay.infrastructure.llm.speech_gateway import LiteLLMSpeechGateway

__all__ = [
    "LLMAuthenticationError",
    "LLMClient",
    "LLMError",
    "LLMRateLimitError",
    "LiteLLMCompletionGateway",
    "LiteLLMSpeechGateway",
    "OpenAIImageGateway",
]
