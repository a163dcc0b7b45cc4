"""Domain entities."""

from chatrelay.domain.entities.chat_input import ChatInput, ImageAttachment
from chatrelay.domain.entities.completion import CompletionMessage, CompletionRequest
from chatrelay.domain.entities.media import (
    AudioClip,
    GeneratedImage,
    ImageRequest,
    SpeechRequest,
)
from chatrelay.domain.entities.message import Message, Role

__all__ = [
    "AudioClip",
    "ChatInput",
    "CompletionMessage",
    "CompletionRequest",
    "GeneratedImage",
    "ImageAttachment",
    "ImageRequest",
    "Message",
    "Role",
    "SpeechRequest",
]
