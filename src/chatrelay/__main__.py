"""アプリケーションのエントリポイント"""

import asyncio
import logging
import signal
import sys

from telegram.error import TelegramError

from chatrelay.application.use_cases import (
    ChatUseCase,
    GenerateImageUseCase,
    SynthesizeSpeechUseCase,
)
from chatrelay.config import ConfigError, LoggingConfig, load_config
from chatrelay.infrastructure.llm import (
    LiteLLMCompletionGateway,
    LiteLLMSpeechGateway,
    LLMClient,
    OpenAIImageGateway,
)
from chatrelay.infrastructure.memory import InMemoryConversationStore
from chatrelay.infrastructure.telegram import (
    TelegramAppRunner,
    TelegramAttachmentExtractor,
    TelegramMessagingService,
    create_telegram_app,
)
from chatrelay.presentation import TelegramMessageRouter, register_handlers

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


async def _cancel_remaining_tasks() -> None:
    """Cancel every other task (in-flight handlers) and wait for them."""
    current = asyncio.current_task()
    tasks = [task for task in asyncio.all_tasks() if task is not current]
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def main() -> None:
    """アプリケーションを起動する"""
    try:
        config = load_config()
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    configure_logging(config.logging)

    app = create_telegram_app(config.telegram)
    runner = TelegramAppRunner(app)

    try:
        await runner.initialize()
    except TelegramError as e:
        logger.error("Failed to initialize Telegram bot: %s", e)
        sys.exit(1)

    # Build dependencies
    store = InMemoryConversationStore(retention=config.chat.context_ttl)
    llm_client = LLMClient(config.openai)
    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)

    chat_use_case = ChatUseCase(
        store=store,
        gateway=LiteLLMCompletionGateway(
            llm_client, debug_llm_messages=debug_llm_messages
        ),
        config=config.chat,
    )
    speech_use_case = SynthesizeSpeechUseCase(
        gateway=LiteLLMSpeechGateway(llm_client),
        config=config.speech,
    )
    image_use_case = GenerateImageUseCase(
        gateway=OpenAIImageGateway(config.openai),
        config=config.image,
    )

    router = TelegramMessageRouter(
        chat_use_case=chat_use_case,
        speech_use_case=speech_use_case,
        image_use_case=image_use_case,
        attachment_extractor=TelegramAttachmentExtractor(app.bot),
        messaging_service=TelegramMessagingService(app.bot),
        access=config.access,
    )
    register_handlers(app, router)

    logger.info(
        "Context window: %d messages, %d minutes",
        config.chat.context_message_limit,
        config.chat.context_ttl_minutes,
    )
    logger.info("Starting polling...")
    await runner.start()

    # Setup signal handlers for graceful shutdown
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    await stop_event.wait()

    logger.info("Shutting down...")

    closed = await runner.close(timeout=5.0)
    if not closed:
        logger.warning("Runner close timed out, cancelling tasks...")

    await _cancel_remaining_tasks()

    logger.info(
        "Shutdown complete (%d conversations in memory discarded)",
        store.conversation_count(),
    )


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
