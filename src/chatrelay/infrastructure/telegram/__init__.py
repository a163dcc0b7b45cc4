"""Telegram integration."""

from chatrelay.infrastructure.telegram.attachments import TelegramAttachmentExtractor
from chatrelay.infrastructure.telegram.client import (
    TelegramAppRunner,
    create_telegram_app,
)
from chatrelay.infrastructure.telegram.messaging import TelegramMessagingService

__all__ = [
    "TelegramAppRunner",
    "TelegramAttachmentExtractor",
    "TelegramMessagingService",
    "create_telegram_app",
]
