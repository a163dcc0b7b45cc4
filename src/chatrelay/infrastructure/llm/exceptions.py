"""LLM-related exceptions."""

from chatrelay.domain.exceptions import UpstreamError


class LLMError(UpstreamError):
    """Base exception for LLM-related errors."""


class LLMRateLimitError(LLMError):
    """Rate limit exceeded error."""


class LLMAuthenticationError(LLMError):
    """Authentication error (invalid API key, etc.)."""
