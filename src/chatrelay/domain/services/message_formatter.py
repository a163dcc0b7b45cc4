"""Formatting utilities for stored turns and outgoing replies."""

from chatrelay.domain.entities import ChatInput

IMAGE_MARKER = "[image attached]"

# Telegram allows 4096 characters per message; replies are kept well below.
MESSAGE_CHUNK_SIZE = 2048

RESPONSE_FILE_NAME = "response.md"


def format_stored_content(chat_input: ChatInput) -> str:
    """Build the text stored for a user turn.

    Images are not stored. A marker line is appended instead so that
    later turns still see that an image was sent.

    Args:
        chat_input: The user's input.

    Returns:
        Stripped text, followed by the image marker when images are present.
    """
    content = chat_input.text.strip()
    if chat_input.has_images():
        if content:
            content += "\n"
        content += IMAGE_MARKER
    return content


def split_text(text: str, chunk_size: int = MESSAGE_CHUNK_SIZE) -> list[str]:
    """Split text into chunks of at most ``chunk_size`` characters.

    Args:
        text: Text to split.
        chunk_size: Maximum characters per chunk. Non-positive disables splitting.

    Returns:
        List of chunks. A text that fits is returned as a single chunk.
    """
    if chunk_size <= 0 or len(text) <= chunk_size:
        return [text]
    return [
        text[start : start + chunk_size] for start in range(0, len(text), chunk_size)
    ]


def should_send_as_file(text: str, chunk_size: int = MESSAGE_CHUNK_SIZE) -> bool:
    """Check if a reply is too long to be sent as a single message."""
    return len(text) > chunk_size


def voice_file_name(audio_format: str) -> str:
    """File name for a voice attachment (``opus`` audio goes in an ogg container)."""
    ext = audio_format.strip() or "opus"
    if ext == "opus":
        ext = "ogg"
    return f"voice.{ext}"


def image_file_name(image_format: str) -> str:
    """File name for a photo attachment."""
    ext = image_format.strip() or "png"
    if ext == "jpeg":
        ext = "jpg"
    return f"image.{ext}"
