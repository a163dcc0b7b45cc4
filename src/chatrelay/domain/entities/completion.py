"""Completion request entities."""

from dataclasses import dataclass, field

from chatrelay.domain.entities.message import Role


@dataclass(frozen=True)
class CompletionMessage:
    """A role-tagged message in an outbound completion request.

    Attributes:
        role: Speaker role.
        text: Message text.
        images: Image data URLs (only the newest user turn carries any).
    """

    role: Role
    text: str
    images: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CompletionRequest:
    """Input for a single completion call."""

    model: str
    messages: list[CompletionMessage]
    max_completion_tokens: int
