"""python-telegram-bot application and runner."""

import asyncio
import logging

from telegram import Update
from telegram.ext import Application

from chatrelay.config import TelegramConfig

logger = logging.getLogger(__name__)


def create_telegram_app(config: TelegramConfig) -> Application:
    """Create a Telegram application.

    Updates are processed concurrently, one task per update.

    Args:
        config: Telegram connection settings.

    Returns:
        Configured Application instance.
    """
    return (
        Application.builder()
        .token(config.bot_token)
        .concurrent_updates(True)
        .build()
    )


class TelegramAppRunner:
    """Manage Telegram application execution.

    This class handles initializing, polling and shutting down the app.
    """

    def __init__(self, app: Application) -> None:
        """Initialize the runner.

        Args:
            app: Application instance.
        """
        self._app = app
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize the app (validates the bot token).

        Raises:
            telegram.error.TelegramError: If the bot cannot be initialized.
        """
        await self._app.initialize()
        self._initialized = True
        logger.info("Telegram bot: @%s", self._app.bot.username)

    async def start(self) -> None:
        """Start long polling."""
        if not self._initialized:
            await self.initialize()
        await self._app.start()
        await self._app.updater.start_polling(allowed_updates=[Update.MESSAGE])

    async def stop(self) -> None:
        """Stop polling and shut the app down."""
        updater = self._app.updater
        if updater is not None and updater.running:
            await updater.stop()
        if self._app.running:
            await self._app.stop()
        if self._initialized:
            await self._app.shutdown()
            self._initialized = False

    async def close(self, timeout: float = 5.0) -> bool:
        """Stop the app with timeout.

        Args:
            timeout: Maximum seconds to wait for close.

        Returns:
            True if closed successfully, False if timed out.
        """
        try:
            await asyncio.wait_for(self.stop(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False
