"""LiteLLM speech gateway."""

import logging

from chatrelay.domain.entities import AudioClip, SpeechRequest
from chatrelay.infrastructure.llm.client import LLMClient
from chatrelay.infrastructure.llm.exceptions import LLMError

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_FORMAT = "mp3"


class LiteLLMSpeechGateway:
    """LiteLLM-based SpeechGateway implementation."""

    def __init__(self, client: LLMClient) -> None:
        self._client = client

    async def speech(self, request: SpeechRequest) -> AudioClip:
        """Synthesize audio for the request text.

        The API answers in mp3 when no format is requested, so the clip is
        labelled accordingly.

        Raises:
            LLMError: If the call fails or returns no audio.
        """
        audio_format = request.format.strip()
        data = await self._client.speech(
            request.model,
            request.voice,
            request.text,
            response_format=audio_format or None,
        )
        if not data:
            logger.error("Speech API returned no audio")
            raise LLMError("speech API returned empty audio")

        return AudioClip(data=data, format=audio_format or DEFAULT_AUDIO_FORMAT)
