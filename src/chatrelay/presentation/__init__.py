"""Presentation layer."""

from chatrelay.presentation.telegram_handlers import (
    TelegramMessageRouter,
    register_handlers,
)

__all__ = ["TelegramMessageRouter", "register_handlers"]
