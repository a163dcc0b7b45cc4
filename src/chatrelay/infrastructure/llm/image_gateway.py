"""Image gateway over the OpenAI Responses API."""

import base64
import logging
from typing import Any

import httpx

from chatrelay.config import OpenAIConfig
from chatrelay.domain.entities import GeneratedImage, ImageRequest
from chatrelay.domain.exceptions import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_FORMAT = "png"
IMAGE_GENERATION_TOOL = "image_generation"
IMAGE_GENERATION_CALL = "image_generation_call"


def build_payload(request: ImageRequest) -> dict[str, Any]:
    """Build a Responses API payload forcing the image generation tool.

    Blank tool options are omitted so the API picks its defaults.
    """
    tool: dict[str, str] = {"type": IMAGE_GENERATION_TOOL}
    for key in ("size", "quality", "format", "background"):
        value = getattr(request, key).strip()
        if value:
            tool[key] = value

    return {
        "model": request.model,
        "input": request.prompt,
        "tools": [tool],
        "tool_choice": {"type": IMAGE_GENERATION_TOOL},
    }


def _error_message(response: httpx.Response) -> str:
    """Extract the API error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"openai error: {error['message']}"
    return f"openai error: status {response.status_code}"


class OpenAIImageGateway:
    """ImageGateway implementation calling ``POST {base_url}/responses``.

    One request per call, no retries.
    """

    def __init__(
        self,
        config: OpenAIConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 300.0,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: API key and base URL.
            http_client: Shared client. A short-lived one is opened per call if None.
            timeout_seconds: Request timeout; image generation is slow.
        """
        self._config = config
        self._http_client = http_client
        self._timeout_seconds = timeout_seconds

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/responses"

    async def generate(self, request: ImageRequest) -> GeneratedImage:
        """Generate an image.

        Args:
            request: Prompt and image options.

        Returns:
            Decoded image bytes and their format.

        Raises:
            UpstreamError: If the model is blank, the request fails, the API
                answers non-2xx, or the response holds no image.
        """
        if not request.model.strip():
            raise UpstreamError("image model is required")

        payload = build_payload(request)
        logger.debug("Image request: model=%s", request.model)

        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, payload)
        except httpx.HTTPError as e:
            logger.error("Image request failed: %s", e)
            raise UpstreamError(f"image request failed: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            logger.error("Image API error: %s", message)
            raise UpstreamError(message)

        return self._parse(response, request)

    async def _post(
        self, client: httpx.AsyncClient, payload: dict[str, Any]
    ) -> httpx.Response:
        return await client.post(
            self.endpoint,
            json=payload,
            headers={"Authorization": f"Bearer {self._config.api_key}"},
            timeout=self._timeout_seconds,
        )

    def _parse(self, response: httpx.Response, request: ImageRequest) -> GeneratedImage:
        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError("image API returned invalid JSON") from e

        output = body.get("output") if isinstance(body, dict) else None
        if not isinstance(output, list):
            output = []
        for item in output:
            if not isinstance(item, dict) or item.get("type") != IMAGE_GENERATION_CALL:
                continue
            result = item.get("result")
            if not isinstance(result, str) or not result.strip():
                continue
            try:
                data = base64.b64decode(result.strip(), validate=True)
            except ValueError as e:
                raise UpstreamError("image API returned invalid base64") from e
            return GeneratedImage(
                data=data,
                format=request.format.strip() or DEFAULT_IMAGE_FORMAT,
            )

        logger.error("Image API response contained no image")
        raise UpstreamError("no image generation result in response")
