"""Telegram messaging service."""

import logging

from telegram import Bot, ReplyParameters
from telegram.error import TelegramError

from chatrelay.domain.entities import AudioClip, GeneratedImage
from chatrelay.domain.exceptions import DeliveryError
from chatrelay.domain.services import (
    RESPONSE_FILE_NAME,
    image_file_name,
    split_text,
    voice_file_name,
)

logger = logging.getLogger(__name__)


def _reply_to(message_id: int | None) -> ReplyParameters | None:
    if message_id is None:
        return None
    return ReplyParameters(message_id=message_id, allow_sending_without_reply=True)


class TelegramMessagingService:
    """Send replies to Telegram chats.

    Text delivery is best effort: failed chunks are logged and skipped.
    File, voice and photo delivery raise DeliveryError so the caller can
    fall back to text.
    """

    def __init__(self, bot: Bot) -> None:
        """Initialize the service.

        Args:
            bot: Telegram Bot instance.
        """
        self._bot = bot

    async def send_text(
        self, chat_id: int, text: str, reply_to: int | None = None
    ) -> None:
        """Send text, split into chunks. Only the first chunk is a reply.

        Args:
            chat_id: Target chat ID.
            text: Message content.
            reply_to: Message ID to reply to.
        """
        for index, chunk in enumerate(split_text(text)):
            try:
                await self._bot.send_message(
                    chat_id=chat_id,
                    text=chunk,
                    reply_parameters=_reply_to(reply_to) if index == 0 else None,
                )
            except TelegramError as e:
                logger.warning("Failed to send reply to chat %s: %s", chat_id, e)

    async def send_document(
        self,
        chat_id: int,
        content: str,
        reply_to: int | None = None,
        filename: str = RESPONSE_FILE_NAME,
    ) -> None:
        """Send text as a downloadable file.

        Raises:
            DeliveryError: If the upload fails.
        """
        try:
            await self._bot.send_document(
                chat_id=chat_id,
                document=content.encode("utf-8"),
                filename=filename,
                reply_parameters=_reply_to(reply_to),
            )
        except TelegramError as e:
            raise DeliveryError(chat_id, f"Failed to send file: {e}") from e

    async def send_voice(
        self, chat_id: int, clip: AudioClip, reply_to: int | None = None
    ) -> None:
        """Send an audio clip as a voice message.

        Raises:
            DeliveryError: If the upload fails.
        """
        try:
            await self._bot.send_voice(
                chat_id=chat_id,
                voice=clip.data,
                filename=voice_file_name(clip.format),
                reply_parameters=_reply_to(reply_to),
            )
        except TelegramError as e:
            raise DeliveryError(chat_id, f"Failed to send voice: {e}") from e

    async def send_photo(
        self, chat_id: int, image: GeneratedImage, reply_to: int | None = None
    ) -> None:
        """Send an image as a photo.

        Raises:
            DeliveryError: If the upload fails.
        """
        try:
            await self._bot.send_photo(
                chat_id=chat_id,
                photo=image.data,
                filename=image_file_name(image.format),
                reply_parameters=_reply_to(reply_to),
            )
        except TelegramError as e:
            raise DeliveryError(chat_id, f"Failed to send image: {e}") from e

    async def send_chat_action(self, chat_id: int, action: str) -> None:
        """Show a chat action (typing, uploading, ...). Failures are logged."""
        try:
            await self._bot.send_chat_action(chat_id=chat_id, action=action)
        except TelegramError as e:
            logger.warning("Failed to send chat action to chat %s: %s", chat_id, e)
