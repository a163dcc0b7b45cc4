"""Speech and image generation entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SpeechRequest:
    """Text-to-speech request.

    Attributes:
        model: Speech model name.
        voice: Voice preset.
        format: Audio response format (``opus``, ``mp3``, ...). May be empty.
        text: Text to synthesize.
    """

    model: str
    voice: str
    format: str
    text: str


@dataclass(frozen=True)
class AudioClip:
    """Synthesized audio."""

    data: bytes
    format: str


@dataclass(frozen=True)
class ImageRequest:
    """Image generation request.

    Attributes:
        model: Model that drives the image generation tool.
        prompt: What to draw.
        size: Image size (``1024x1024``, ``auto``, ...). May be empty.
        quality: Quality preset. May be empty.
        format: Output format (``png``, ``jpeg``, ``webp``). May be empty.
        background: Background mode (``transparent``, ``opaque``, ``auto``).
    """

    model: str
    prompt: str
    size: str = ""
    quality: str = ""
    format: str = ""
    background: str = ""


@dataclass(frozen=True)
class GeneratedImage:
    """Generated image bytes."""

    data: bytes
    format: str
