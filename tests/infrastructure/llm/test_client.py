"""Tests for LLMClient."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from litellm.exceptions import AuthenticationError, RateLimitError

from chatrelay.config import OpenAIConfig
from chatrelay.infrastructure.llm import (
    LLMAuthenticationError,
    LLMClient,
    LLMError,
    LLMRateLimitError,
)

MESSAGES = [{"role": "user", "content": "Hello"}]


class TestLLMClient:
    """LLMClient.complete tests."""

    @pytest.fixture
    def config(self) -> OpenAIConfig:
        """Create OpenAI config."""
        return OpenAIConfig(api_key="sk-test", base_url="https://llm.example/v1")

    @pytest.fixture
    def client(self, config: OpenAIConfig) -> LLMClient:
        """Create LLMClient instance."""
        return LLMClient(config)

    @pytest.fixture
    def mock_response(self) -> MagicMock:
        """Create mock LiteLLM response."""
        response = MagicMock()
        response.choices = [MagicMock()]
        response.choices[0].message.content = "Hello! How can I help you?"
        return response

    async def test_complete_success(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test successful completion."""
        with patch(
            "litellm.acompletion", new_callable=AsyncMock, return_value=mock_response
        ) as mock_completion:
            result = await client.complete("gpt-test", MESSAGES)

            assert result == "Hello! How can I help you?"
            mock_completion.assert_awaited_once()

    async def test_complete_applies_connection_params(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test that credentials and kwargs are passed through."""
        with patch(
            "litellm.acompletion", new_callable=AsyncMock, return_value=mock_response
        ) as mock_completion:
            await client.complete("gpt-test", MESSAGES, max_completion_tokens=512)

            call_kwargs = mock_completion.call_args.kwargs
            assert call_kwargs["model"] == "gpt-test"
            assert call_kwargs["messages"] == MESSAGES
            assert call_kwargs["api_key"] == "sk-test"
            assert call_kwargs["api_base"] == "https://llm.example/v1"
            assert call_kwargs["custom_llm_provider"] == "openai"
            assert call_kwargs["max_retries"] == 0
            assert call_kwargs["max_completion_tokens"] == 512

    async def test_complete_authentication_error(self, client: LLMClient) -> None:
        """Test that authentication errors are converted."""
        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.side_effect = AuthenticationError(
                message="Invalid API key",
                llm_provider="openai",
                model="gpt-test",
            )

            with pytest.raises(LLMAuthenticationError):
                await client.complete("gpt-test", MESSAGES)

    async def test_complete_rate_limit_error(self, client: LLMClient) -> None:
        """Test that rate limit errors are converted."""
        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.side_effect = RateLimitError(
                message="Rate limit exceeded",
                llm_provider="openai",
                model="gpt-test",
            )

            with pytest.raises(LLMRateLimitError):
                await client.complete("gpt-test", MESSAGES)

    async def test_complete_generic_error(self, client: LLMClient) -> None:
        """Test that other errors are converted to LLMError."""
        with patch("litellm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.side_effect = Exception("Unknown error")

            with pytest.raises(LLMError):
                await client.complete("gpt-test", MESSAGES)

    async def test_complete_no_choices(self, client: LLMClient) -> None:
        """Test that a response without choices is an error."""
        response = MagicMock()
        response.choices = []
        with patch(
            "litellm.acompletion", new_callable=AsyncMock, return_value=response
        ):
            with pytest.raises(LLMError, match="empty response"):
                await client.complete("gpt-test", MESSAGES)

    async def test_complete_null_content(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test that a choice without content is an error."""
        mock_response.choices[0].message.content = None
        with patch(
            "litellm.acompletion", new_callable=AsyncMock, return_value=mock_response
        ):
            with pytest.raises(LLMError):
                await client.complete("gpt-test", MESSAGES)

    async def test_complete_empty_string_is_returned(
        self, client: LLMClient, mock_response: MagicMock
    ) -> None:
        """Test that an empty but present content is passed through."""
        mock_response.choices[0].message.content = ""
        with patch(
            "litellm.acompletion", new_callable=AsyncMock, return_value=mock_response
        ):
            assert await client.complete("gpt-test", MESSAGES) == ""


class TestLLMClientSpeech:
    """LLMClient.speech tests."""

    @pytest.fixture
    def client(self) -> LLMClient:
        """Create LLMClient instance."""
        return LLMClient(OpenAIConfig(api_key="sk-test"))

    async def test_speech_returns_bytes(self, client: LLMClient) -> None:
        """Test that the audio payload is returned."""
        response = MagicMock()
        response.content = b"OggS..."
        with patch(
            "litellm.aspeech", new_callable=AsyncMock, return_value=response
        ) as mock_speech:
            result = await client.speech("tts-test", "alloy", "hi", "opus")

            assert result == b"OggS..."
            call_kwargs = mock_speech.call_args.kwargs
            assert call_kwargs["model"] == "tts-test"
            assert call_kwargs["voice"] == "alloy"
            assert call_kwargs["input"] == "hi"
            assert call_kwargs["response_format"] == "opus"
            assert call_kwargs["api_base"] == "https://api.openai.com/v1"

    async def test_speech_omits_missing_format(self, client: LLMClient) -> None:
        """Test that no response_format is sent when none is given."""
        response = MagicMock()
        response.content = b"ID3"
        with patch(
            "litellm.aspeech", new_callable=AsyncMock, return_value=response
        ) as mock_speech:
            await client.speech("tts-test", "alloy", "hi")

            assert "response_format" not in mock_speech.call_args.kwargs

    async def test_speech_error(self, client: LLMClient) -> None:
        """Test that failures are converted to LLMError."""
        with patch("litellm.aspeech", new_callable=AsyncMock) as mock_speech:
            mock_speech.side_effect = Exception("boom")

            with pytest.raises(LLMError):
                await client.speech("tts-test", "alloy", "hi")
