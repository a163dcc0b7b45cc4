"""Turn Telegram messages into platform-neutral chat input."""

import base64
import logging
import mimetypes
from datetime import timedelta
from typing import Any

from telegram import Bot, Message
from telegram.error import TelegramError

from chatrelay.domain.entities import ChatInput, ImageAttachment

logger = logging.getLogger(__name__)

FILE_COMMAND = "/file"


def _seconds(duration: Any) -> int:
    """Duration in whole seconds (python-telegram-bot may return timedelta)."""
    if isinstance(duration, timedelta):
        return int(duration.total_seconds())
    return int(duration or 0)


def _is_image_mime(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.lower().startswith("image/")


def resolve_image_mime(file_path: str | None, fallback_mime: str | None) -> str | None:
    """Pick the image MIME type for a downloaded file.

    The declared MIME type wins when it is an image type; otherwise the
    file extension is consulted.

    Returns:
        An ``image/*`` MIME type, or None when the file is not an image.
    """
    if _is_image_mime(fallback_mime):
        return fallback_mime
    if file_path:
        guessed, _ = mimetypes.guess_type(file_path)
        if _is_image_mime(guessed):
            return guessed
    return None


def strip_file_command(text: str) -> tuple[str, bool]:
    """Remove a leading ``/file`` command.

    Returns:
        The remaining text and whether file output was requested.
    """
    if text.lower().startswith(FILE_COMMAND):
        return text[len(FILE_COMMAND) :].strip(), True
    return text, False


def describe_document(document: Any) -> str:
    return (
        f"Document: {document.file_name} ({document.file_size or 0} bytes, "
        f"mime {document.mime_type})."
    )


def describe_photo(photo: Any) -> str:
    return (
        f"Photo: resolution {photo.width}x{photo.height} "
        f"({photo.file_size or 0} bytes)."
    )


def describe_audio(audio: Any) -> str:
    return (
        f"Audio: {audio.title} ({_seconds(audio.duration)} sec, "
        f"{audio.file_size or 0} bytes, mime {audio.mime_type})."
    )


def describe_voice(voice: Any) -> str:
    return (
        f"Voice message: duration {_seconds(voice.duration)} sec "
        f"({voice.file_size or 0} bytes, mime {voice.mime_type})."
    )


def describe_video(video: Any) -> str:
    return (
        f"Video: resolution {video.width}x{video.height} "
        f"({_seconds(video.duration)} sec, {video.file_size or 0} bytes, "
        f"mime {video.mime_type})."
    )


def describe_video_note(note: Any) -> str:
    return (
        f"Video note: resolution {note.length}x{note.length} "
        f"({_seconds(note.duration)} sec, {note.file_size or 0} bytes)."
    )


def describe_sticker(sticker: Any) -> str:
    return f"Sticker received: set {sticker.set_name}, emoji {sticker.emoji}"


def describe_animation(animation: Any) -> str:
    name = animation.file_name or animation.file_id
    return (
        f"Animation: {name} ({animation.file_size or 0} bytes, "
        f"mime {animation.mime_type})."
    )


class TelegramAttachmentExtractor:
    """Build ChatInput from a Telegram message.

    Every attachment becomes a one-line description. Photos and image
    documents/animations are also downloaded and inlined as data URLs; a
    failed download keeps the description and drops the image.
    """

    def __init__(self, bot: Bot) -> None:
        """Initialize the extractor.

        Args:
            bot: Telegram Bot used to download files.
        """
        self._bot = bot

    async def build_chat_input(self, message: Message) -> tuple[ChatInput, bool]:
        """Convert a message to chat input.

        Args:
            message: Incoming Telegram message.

        Returns:
            The chat input, and whether the reply should be sent as a file.
        """
        text, respond_as_file = strip_file_command(message.text or "")

        parts: list[str] = []
        if text:
            parts.append(text)
        if message.caption:
            parts.append(f"Caption: {message.caption}")

        descriptions, images = await self.describe_attachments(message)
        parts.extend(descriptions)

        return ChatInput(text="\n".join(parts), images=images), respond_as_file

    async def describe_attachments(
        self, message: Message
    ) -> tuple[list[str], list[ImageAttachment]]:
        """Describe every attachment and collect inline images.

        Returns:
            Description lines and downloaded images.
        """
        parts: list[str] = []
        images: list[ImageAttachment] = []

        if message.document is not None:
            document = message.document
            parts.append(describe_document(document))
            if _is_image_mime(document.mime_type):
                await self._add_image(images, document.file_id, document.mime_type)
        if message.photo:
            best = message.photo[-1]
            parts.append(describe_photo(best))
            await self._add_image(images, best.file_id, "image/jpeg")
        if message.audio is not None:
            parts.append(describe_audio(message.audio))
        if message.voice is not None:
            parts.append(describe_voice(message.voice))
        if message.video is not None:
            parts.append(describe_video(message.video))
        if message.video_note is not None:
            parts.append(describe_video_note(message.video_note))
        if message.sticker is not None:
            parts.append(describe_sticker(message.sticker))
        if message.animation is not None:
            animation = message.animation
            parts.append(describe_animation(animation))
            if _is_image_mime(animation.mime_type):
                await self._add_image(images, animation.file_id, animation.mime_type)

        return parts, images

    async def _add_image(
        self,
        images: list[ImageAttachment],
        file_id: str,
        fallback_mime: str | None,
    ) -> None:
        try:
            data_url = await self.fetch_data_url(file_id, fallback_mime)
        except TelegramError as e:
            logger.warning("Could not fetch image %s: %s", file_id, e)
            return
        if data_url is None:
            logger.warning("Skipping non-image file %s", file_id)
            return
        images.append(ImageAttachment(data_url=data_url))

    async def fetch_data_url(
        self, file_id: str, fallback_mime: str | None
    ) -> str | None:
        """Download a file and encode it as a data URL.

        Returns:
            ``data:<mime>;base64,...``, or None if the file is not an image.

        Raises:
            TelegramError: If the download fails.
        """
        tg_file = await self._bot.get_file(file_id)
        mime_type = resolve_image_mime(tg_file.file_path, fallback_mime)
        if mime_type is None:
            return None

        data = await tg_file.download_as_bytearray()
        encoded = base64.b64encode(bytes(data)).decode("ascii")
        return f"data:{mime_type};base64,{encoded}"
