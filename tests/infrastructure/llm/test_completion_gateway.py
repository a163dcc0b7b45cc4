"""Tests for LiteLLMCompletionGateway."""

import logging
from unittest.mock import MagicMock

import pytest

from chatrelay.domain.entities import CompletionMessage, CompletionRequest, Role
from chatrelay.infrastructure.llm import LiteLLMCompletionGateway, LLMError
from chatrelay.infrastructure.llm.completion_gateway import to_api_messages

IMAGE_URL = "data:image/jpeg;base64,/9j/"


class TestToApiMessages:
    """to_api_messages tests."""

    def test_plain_messages_keep_string_content(self) -> None:
        """Test that messages without images use string content."""
        messages = [
            CompletionMessage(role=Role.SYSTEM, text="be nice"),
            CompletionMessage(role=Role.USER, text="hello"),
            CompletionMessage(role=Role.ASSISTANT, text="hi"),
        ]

        assert to_api_messages(messages) == [
            {"role": "system", "content": "be nice"},
            {"role": "user", "content": "hello"},
            {"role": "assistant", "content": "hi"},
        ]

    def test_images_become_content_parts(self) -> None:
        """Test that text precedes one image part per image."""
        message = CompletionMessage(
            role=Role.USER, text="what is it?", images=[IMAGE_URL, IMAGE_URL]
        )

        result = to_api_messages([message])

        image_part = {
            "type": "image_url",
            "image_url": {"url": IMAGE_URL, "detail": "auto"},
        }
        assert result == [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "what is it?"},
                    image_part,
                    image_part,
                ],
            }
        ]

    def test_blank_text_is_omitted_from_parts(self) -> None:
        """Test that an image-only message has no text part."""
        message = CompletionMessage(role=Role.USER, text="  ", images=[IMAGE_URL])

        content = to_api_messages([message])[0]["content"]

        assert [part["type"] for part in content] == ["image_url"]


class TestLiteLLMCompletionGateway:
    """LiteLLMCompletionGateway tests."""

    @pytest.fixture
    def request_(self) -> CompletionRequest:
        """Create completion request."""
        return CompletionRequest(
            model="gpt-test",
            messages=[
                CompletionMessage(role=Role.SYSTEM, text="be nice"),
                CompletionMessage(role=Role.USER, text="hello", images=[IMAGE_URL]),
            ],
            max_completion_tokens=300,
        )

    async def test_complete_calls_client(
        self, mock_client: MagicMock, request_: CompletionRequest
    ) -> None:
        """Test that model, converted messages and token limit are passed."""
        gateway = LiteLLMCompletionGateway(mock_client)

        result = await gateway.complete(request_)

        assert result == "Hello! Nice to meet you."
        args = mock_client.complete.call_args
        assert args.args[0] == "gpt-test"
        assert args.args[1] == to_api_messages(request_.messages)
        assert args.kwargs == {"max_completion_tokens": 300}

    async def test_complete_propagates_errors(
        self, mock_client: MagicMock, request_: CompletionRequest
    ) -> None:
        """Test that client errors reach the caller."""
        mock_client.complete.side_effect = LLMError("down")
        gateway = LiteLLMCompletionGateway(mock_client)

        with pytest.raises(LLMError):
            await gateway.complete(request_)

    async def test_debug_logging_hides_image_data(
        self,
        mock_client: MagicMock,
        request_: CompletionRequest,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that debug_llm_messages logs at INFO without image payloads."""
        gateway = LiteLLMCompletionGateway(mock_client, debug_llm_messages=True)

        with caplog.at_level(
            logging.INFO, logger="chatrelay.infrastructure.llm.completion_gateway"
        ):
            await gateway.complete(request_)

        assert "=== LLM Request Messages ===" in caplog.text
        assert "images=1" in caplog.text
        assert "Hello! Nice to meet you." in caplog.text
        assert IMAGE_URL not in caplog.text

    async def test_no_logging_by_default(
        self,
        mock_client: MagicMock,
        request_: CompletionRequest,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that messages are not logged at INFO by default."""
        gateway = LiteLLMCompletionGateway(mock_client)

        with caplog.at_level(
            logging.INFO, logger="chatrelay.infrastructure.llm.completion_gateway"
        ):
            await gateway.complete(request_)

        assert "LLM Request Messages" not in caplog.text
