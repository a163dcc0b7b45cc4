"""Telegram update handlers."""

import logging
from typing import Any

from telegram import Message, Update
from telegram.constants import ChatAction
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from chatrelay.application.use_cases import (
    ChatUseCase,
    GenerateImageUseCase,
    SynthesizeSpeechUseCase,
)
from chatrelay.config import AccessConfig
from chatrelay.domain.exceptions import (
    AuthorizationDenied,
    DeliveryError,
    EmptyMessageError,
    EmptyPromptError,
    EmptyTextError,
    UpstreamError,
)
from chatrelay.domain.services import ensure_allowed, should_send_as_file
from chatrelay.infrastructure.telegram import (
    TelegramAttachmentExtractor,
    TelegramMessagingService,
)
from chatrelay.presentation.commands import (
    IMAGE_COMMAND,
    TTS_COMMAND,
    extract_command_text,
)

logger = logging.getLogger(__name__)

ACCESS_DENIED = "access denied"
TTS_USAGE = "usage: /tts <text>"
IMAGE_USAGE = "usage: /img <prompt>"
EMPTY_MESSAGE_HINT = "i need some content to work with"
EMPTY_TEXT_HINT = "i need some text to synthesize"
EMPTY_PROMPT_HINT = "i need a prompt to generate an image"
CHAT_FAILED = "failed to reach openai, try again later"
SPEECH_FAILED = "failed to generate audio, try again later"
IMAGE_FAILED = "failed to generate image, try again later"
FILE_FALLBACK = "could not send file, here is the text"
VOICE_DELIVERY_FAILED = "could not send voice message"
IMAGE_DELIVERY_FAILED = "could not send image"


class TelegramMessageRouter:
    """Route incoming Telegram messages to use cases and render results.

    Order of checks: sender authorization, ``/tts``, ``/img``, then chat.
    Validation errors become short hints, upstream errors a generic
    "try again later" reply; nothing is retried.
    """

    def __init__(
        self,
        chat_use_case: ChatUseCase,
        speech_use_case: SynthesizeSpeechUseCase,
        image_use_case: GenerateImageUseCase,
        attachment_extractor: TelegramAttachmentExtractor,
        messaging_service: TelegramMessagingService,
        access: AccessConfig,
    ) -> None:
        """Initialize the router.

        Args:
            chat_use_case: Use case for chat replies.
            speech_use_case: Use case for /tts.
            image_use_case: Use case for /img.
            attachment_extractor: Converts messages to chat input.
            messaging_service: Sends replies.
            access: Allow-lists.
        """
        self._chat = chat_use_case
        self._speech = speech_use_case
        self._image = image_use_case
        self._extractor = attachment_extractor
        self._messaging = messaging_service
        self._access = access

    async def handle_update(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle one incoming update.

        Updates without a message or sender are ignored.
        """
        message = update.message
        if message is None or message.from_user is None:
            return

        chat_id = message.chat_id
        user_id = message.from_user.id
        logger.info(
            "Processing message: chat=%s, user=%s, message=%s",
            chat_id,
            user_id,
            message.message_id,
        )

        try:
            ensure_allowed(user_id, chat_id, self._access)
        except AuthorizationDenied as e:
            logger.info("%s", e)
            await self._messaging.send_text(chat_id, ACCESS_DENIED, message.message_id)
            return

        tts_text = extract_command_text(message.text, TTS_COMMAND)
        if tts_text is not None:
            await self._handle_speech(message, tts_text)
            return

        prompt = extract_command_text(message.text, IMAGE_COMMAND)
        if prompt is not None:
            await self._handle_image(message, prompt)
            return

        await self._handle_chat(message)

    async def _handle_speech(self, message: Message, text: str) -> None:
        chat_id, reply_to = message.chat_id, message.message_id
        if not text:
            await self._messaging.send_text(chat_id, TTS_USAGE, reply_to)
            return

        await self._messaging.send_chat_action(chat_id, ChatAction.UPLOAD_VOICE)
        try:
            clip = await self._speech.synthesize(text)
        except EmptyTextError:
            await self._messaging.send_text(chat_id, EMPTY_TEXT_HINT, reply_to)
            return
        except UpstreamError:
            logger.exception("Speech request failed")
            await self._messaging.send_text(chat_id, SPEECH_FAILED, reply_to)
            return

        try:
            await self._messaging.send_voice(chat_id, clip, reply_to)
        except DeliveryError as e:
            logger.warning("%s", e)
            await self._messaging.send_text(chat_id, VOICE_DELIVERY_FAILED, reply_to)

    async def _handle_image(self, message: Message, prompt: str) -> None:
        chat_id, reply_to = message.chat_id, message.message_id
        if not prompt:
            await self._messaging.send_text(chat_id, IMAGE_USAGE, reply_to)
            return

        await self._messaging.send_chat_action(chat_id, ChatAction.UPLOAD_PHOTO)
        try:
            image = await self._image.generate(prompt)
        except EmptyPromptError:
            await self._messaging.send_text(chat_id, EMPTY_PROMPT_HINT, reply_to)
            return
        except UpstreamError:
            logger.exception("Image generation failed")
            await self._messaging.send_text(chat_id, IMAGE_FAILED, reply_to)
            return

        try:
            await self._messaging.send_photo(chat_id, image, reply_to)
        except DeliveryError as e:
            logger.warning("%s", e)
            await self._messaging.send_text(chat_id, IMAGE_DELIVERY_FAILED, reply_to)

    async def _handle_chat(self, message: Message) -> None:
        chat_id, reply_to = message.chat_id, message.message_id

        chat_input, respond_as_file = await self._extractor.build_chat_input(message)
        action = ChatAction.UPLOAD_DOCUMENT if respond_as_file else ChatAction.TYPING
        await self._messaging.send_chat_action(chat_id, action)

        try:
            response = await self._chat.handle_message(chat_id, chat_input)
        except EmptyMessageError:
            await self._messaging.send_text(chat_id, EMPTY_MESSAGE_HINT, reply_to)
            return
        except UpstreamError:
            logger.exception("Completion request failed")
            await self._messaging.send_text(chat_id, CHAT_FAILED, reply_to)
            return

        if not respond_as_file and not should_send_as_file(response):
            await self._messaging.send_text(chat_id, response, reply_to)
            return

        try:
            await self._messaging.send_document(chat_id, response, reply_to)
        except DeliveryError as e:
            logger.warning("%s", e)
            await self._messaging.send_text(chat_id, FILE_FALLBACK, reply_to)
            await self._messaging.send_text(chat_id, response, reply_to)


async def _log_error(update: Any, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Error while handling update", exc_info=context.error)


def register_handlers(app: Application, router: TelegramMessageRouter) -> None:
    """Register Telegram update handlers.

    Args:
        app: Application instance.
        router: Router handling every new message.
    """
    app.add_handler(MessageHandler(filters.UpdateType.MESSAGE, router.handle_update))
    app.add_error_handler(_log_error)
