"""設定管理モジュール"""

from chatrelay.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
    parse_ids,
)
from chatrelay.config.models import (
    AccessConfig,
    ChatConfig,
    Config,
    ImageConfig,
    LoggingConfig,
    OpenAIConfig,
    SpeechConfig,
    TelegramConfig,
)

__all__ = [
    "AccessConfig",
    "ChatConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "ImageConfig",
    "LoggingConfig",
    "OpenAIConfig",
    "SpeechConfig",
    "TelegramConfig",
    "expand_env_vars",
    "load_config",
    "parse_ids",
]
