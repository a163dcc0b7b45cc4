"""Image generation use case."""

from chatrelay.config import ImageConfig
from chatrelay.domain.entities import GeneratedImage, ImageRequest
from chatrelay.domain.exceptions import EmptyPromptError
from chatrelay.domain.services import ImageGateway


class GenerateImageUseCase:
    """Turn a prompt into an image with the configured model and options."""

    def __init__(self, gateway: ImageGateway, config: ImageConfig) -> None:
        self._gateway = gateway
        self._config = config

    async def generate(self, prompt: str) -> GeneratedImage:
        """Generate an image.

        Raises:
            EmptyPromptError: If the prompt is blank. No upstream call is made.
            UpstreamError: If the image call fails.
        """
        if not prompt.strip():
            raise EmptyPromptError()

        return await self._gateway.generate(
            ImageRequest(
                model=self._config.model,
                prompt=prompt,
                size=self._config.size,
                quality=self._config.quality,
                format=self._config.format,
                background=self._config.background,
            )
        )
