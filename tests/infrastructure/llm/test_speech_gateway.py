"""Tests for LiteLLMSpeechGateway."""

from unittest.mock import MagicMock

import pytest

from chatrelay.domain.entities import AudioClip, SpeechRequest
from chatrelay.infrastructure.llm import LiteLLMSpeechGateway, LLMError


class TestLiteLLMSpeechGateway:
    """LiteLLMSpeechGateway tests."""

    async def test_speech_passes_request(self, mock_client: MagicMock) -> None:
        """Test that the request is forwarded and the format kept."""
        gateway = LiteLLMSpeechGateway(mock_client)

        clip = await gateway.speech(
            SpeechRequest(model="tts-test", voice="nova", format="opus", text="hi")
        )

        assert clip == AudioClip(data=b"OggS", format="opus")
        mock_client.speech.assert_awaited_once_with(
            "tts-test", "nova", "hi", response_format="opus"
        )

    async def test_blank_format_uses_api_default(
        self, mock_client: MagicMock
    ) -> None:
        """Test that a blank format is not sent and the clip is mp3."""
        gateway = LiteLLMSpeechGateway(mock_client)

        clip = await gateway.speech(
            SpeechRequest(model="tts-test", voice="nova", format=" ", text="hi")
        )

        assert clip.format == "mp3"
        assert mock_client.speech.call_args.kwargs["response_format"] is None

    async def test_empty_audio_is_error(self, mock_client: MagicMock) -> None:
        """Test that an empty payload is an upstream error."""
        mock_client.speech.return_value = b""
        gateway = LiteLLMSpeechGateway(mock_client)

        with pytest.raises(LLMError):
            await gateway.speech(
                SpeechRequest(model="tts-test", voice="nova", format="", text="hi")
            )
