"""Common fixtures for LLM infrastructure tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from chatrelay.config import OpenAIConfig
from chatrelay.infrastructure.llm import LLMClient


@pytest.fixture
def openai_config() -> OpenAIConfig:
    """Create test OpenAI config."""
    return OpenAIConfig(api_key="sk-test", base_url="https://llm.example/v1")


@pytest.fixture
def mock_client() -> MagicMock:
    """Create mock LLMClient."""
    client = MagicMock(spec=LLMClient)
    client.complete = AsyncMock(return_value="Hello! Nice to meet you.")
    client.speech = AsyncMock(return_value=b"OggS")
    return client
