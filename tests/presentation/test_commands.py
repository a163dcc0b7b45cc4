"""Tests for command parsing."""

import pytest

from chatrelay.presentation.commands import (
    IMAGE_COMMAND,
    TTS_COMMAND,
    extract_command_text,
)


class TestExtractCommandText:
    """extract_command_text tests."""

    def test_returns_argument(self) -> None:
        """Test the argument after the command."""
        assert extract_command_text("/tts hello there", TTS_COMMAND) == "hello there"

    def test_bot_mention_is_accepted(self) -> None:
        """Test /cmd@bot form."""
        assert extract_command_text("/img@relay_bot a cat", IMAGE_COMMAND) == "a cat"

    def test_case_insensitive(self) -> None:
        """Test upper-case command names."""
        assert extract_command_text("/TTS hi", TTS_COMMAND) == "hi"

    def test_multiline_argument_is_kept(self) -> None:
        """Test that the argument keeps inner newlines."""
        assert extract_command_text("/tts line one\nline two", TTS_COMMAND) == (
            "line one\nline two"
        )

    @pytest.mark.parametrize("text", ["/tts", "/tts   ", "/tts@relay_bot"])
    def test_missing_argument_is_empty_string(self, text: str) -> None:
        """Test that a bare command yields an empty argument."""
        assert extract_command_text(text, TTS_COMMAND) == ""

    @pytest.mark.parametrize(
        "text", [None, "", "hello", "/ttsx hi", "/img a cat", "say /tts hi"]
    )
    def test_other_text_is_none(self, text: str | None) -> None:
        """Test that anything else is not the command."""
        assert extract_command_text(text, TTS_COMMAND) is None
