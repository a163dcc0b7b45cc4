"""Speech synthesis use case."""

from chatrelay.config import SpeechConfig
from chatrelay.domain.entities import AudioClip, SpeechRequest
from chatrelay.domain.exceptions import EmptyTextError
from chatrelay.domain.services import SpeechGateway


class SynthesizeSpeechUseCase:
    """Turn text into a voice clip with the configured model and voice."""

    def __init__(self, gateway: SpeechGateway, config: SpeechConfig) -> None:
        self._gateway = gateway
        self._config = config

    async def synthesize(self, text: str) -> AudioClip:
        """Synthesize speech.

        Blank text is rejected before any upstream call.

        Raises:
            EmptyTextError: If the text is blank.
            UpstreamError: If the speech call fails.
        """
        if not text.strip():
            raise EmptyTextError()

        return await self._gateway.speech(
            SpeechRequest(
                model=self._config.model,
                voice=self._config.voice,
                format=self._config.format,
                text=text,
            )
        )
