"""Domain exceptions."""


class ValidationError(Exception):
    """Input rejected locally, before any upstream call."""


class EmptyMessageError(ValidationError):
    """Chat input has neither text nor images."""

    def __init__(self) -> None:
        super().__init__("empty message")


class EmptyTextError(ValidationError):
    """Speech synthesis was asked for blank text."""

    def __init__(self) -> None:
        super().__init__("empty text")


class EmptyPromptError(ValidationError):
    """Image generation was asked for a blank prompt."""

    def __init__(self) -> None:
        super().__init__("empty prompt")


class UpstreamError(Exception):
    """An upstream API call failed or returned an unusable payload.

    Raised on transport failures, non-2xx responses, and successful
    responses that carry no usable result (no choices, no image).
    """


class AuthorizationDenied(Exception):
    """Sender is neither an admin nor on an allow-list.

    Attributes:
        user_id: Sender ID.
        chat_id: Chat ID.
    """

    def __init__(self, user_id: int, chat_id: int) -> None:
        self.user_id = user_id
        self.chat_id = chat_id
        super().__init__(f"User {user_id} in chat {chat_id} is not allowed")


class DeliveryError(Exception):
    """A reply could not be delivered back to the chat platform.

    Attributes:
        chat_id: Target chat ID.
    """

    def __init__(self, chat_id: int, message: str = "") -> None:
        self.chat_id = chat_id
        super().__init__(message or f"Failed to deliver to chat {chat_id}")
