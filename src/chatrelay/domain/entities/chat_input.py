"""Platform-neutral chat input."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageAttachment:
    """Inline image sent along with a user turn.

    Attributes:
        data_url: ``data:<mime>;base64,<payload>`` URL.
    """

    data_url: str


@dataclass(frozen=True)
class ChatInput:
    """User input extracted from a platform message.

    Attributes:
        text: Free text, including caption and attachment descriptions.
        images: Images to inline into the completion request.
    """

    text: str = ""
    images: list[ImageAttachment] = field(default_factory=list)

    def has_images(self) -> bool:
        """Check if at least one image is attached."""
        return bool(self.images)

    def is_empty(self) -> bool:
        """Check if there is neither text nor an image."""
        return not self.text.strip() and not self.images
