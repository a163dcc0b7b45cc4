"""Domain services."""

from chatrelay.domain.services.access_policy import ensure_allowed, is_allowed
from chatrelay.domain.services.message_formatter import (
    IMAGE_MARKER,
    MESSAGE_CHUNK_SIZE,
    RESPONSE_FILE_NAME,
    format_stored_content,
    image_file_name,
    should_send_as_file,
    split_text,
    voice_file_name,
)
from chatrelay.domain.services.protocols import (
    CompletionGateway,
    ImageGateway,
    SpeechGateway,
)

__all__ = [
    "IMAGE_MARKER",
    "MESSAGE_CHUNK_SIZE",
    "RESPONSE_FILE_NAME",
    "CompletionGateway",
    "ImageGateway",
    "SpeechGateway",
    "ensure_allowed",
    "format_stored_content",
    "image_file_name",
    "is_allowed",
    "should_send_as_file",
    "split_text",
    "voice_file_name",
]
