"""Domain service protocols."""

from typing import Protocol

from chatrelay.domain.entities import (
    AudioClip,
    CompletionRequest,
    GeneratedImage,
    ImageRequest,
    SpeechRequest,
)


class CompletionGateway(Protocol):
    """Chat completion abstraction.

    Implementations perform exactly one upstream call per invocation.
    """

    async def complete(self, request: CompletionRequest) -> str:
        """Generate a reply for the given messages.

        Args:
            request: Model, ordered messages and token limit.

        Returns:
            Generated text.

        Raises:
            UpstreamError: If the call fails or returns no choices.
        """
        ...


class SpeechGateway(Protocol):
    """Text-to-speech abstraction."""

    async def speech(self, request: SpeechRequest) -> AudioClip:
        """Synthesize audio.

        Raises:
            UpstreamError: If the call fails.
        """
        ...


class ImageGateway(Protocol):
    """Image generation abstraction."""

    async def generate(self, request: ImageRequest) -> GeneratedImage:
        """Generate an image.

        Raises:
            UpstreamError: If the call fails or yields no image.
        """
        ...
