"""環境変数・.env・YAML設定ファイルの読み込み

優先順位は 環境変数 > config.yaml > デフォルト値。
.env は既存の環境変数を上書きしない。
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

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

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def parse_ids(raw: Any) -> list[int]:
    """カンマ区切り文字列またはリストからIDリストを作る

    解析できない要素は警告を出して読み飛ばす。

    Args:
        raw: "1, 2,3" のような文字列、またはリスト

    Returns:
        IDリスト
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        parts = [str(item) for item in raw]
    else:
        parts = str(raw).split(",")

    ids: list[int] = []
    for part in parts:
        part = part.strip()
        if not part:
            continue
        try:
            ids.append(int(part))
        except ValueError:
            logger.warning("Skipping invalid id %r", part)
    return ids


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """YAMLのセクションを取得する（未定義なら空dict）

    Raises:
        ConfigValidationError: セクションがマッピングでない
    """
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigValidationError(f"Section '{name}' must be a mapping")
    return section


def _setting(section: dict[str, Any], key: str, env: str, default: Any) -> Any:
    """環境変数 > YAML > デフォルト値 の順で値を解決する"""
    env_value = os.environ.get(env, "").strip()
    if env_value:
        return env_value
    value = section.get(key)
    if value is None or value == "":
        return default
    return value


def _int_setting(section: dict[str, Any], key: str, env: str, default: int) -> int:
    """整数設定を解決する。解析できない場合はデフォルト値を使う"""
    value = _setting(section, key, env, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid int for %s=%r, using default %d", env, value, default)
        return default


def _required_setting(section: dict[str, Any], key: str, env: str, path: str) -> str:
    """必須設定を解決する

    Raises:
        ConfigValidationError: 値が存在しない
    """
    value = _setting(section, key, env, None)
    if value is None:
        raise ConfigValidationError(
            f"Required setting '{env}' (or '{path}' in config file) is missing"
        )
    return str(value)


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAMLファイルを読み込み、環境変数を展開する"""
    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f)

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping")
    return _expand_recursive(raw_data)


def load_config(
    path: str | Path | None = "config.yaml",
    env_file: str | Path | None = ".env",
) -> Config:
    """設定を読み込む

    Args:
        path: 任意の config.yaml のパス（存在しなければ無視）
        env_file: 任意の .env のパス（存在しなければ無視）

    Returns:
        Config オブジェクト

    Raises:
        ConfigValidationError: 必須項目が欠落
        EnvironmentVariableError: YAML中の環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    if env_file is not None and Path(env_file).exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)

    data: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        data = _read_yaml(Path(path))
        logger.debug("Loaded config file %s", path)

    openai_data = _section(data, "openai")
    telegram_data = _section(data, "telegram")
    chat_data = _section(data, "chat")
    speech_data = _section(data, "speech")
    image_data = _section(data, "image")
    access_data = _section(data, "access")

    openai = OpenAIConfig(
        api_key=_required_setting(
            openai_data, "api_key", "OPENAI_API_KEY", "openai.api_key"
        ),
        base_url=str(
            _setting(
                openai_data, "base_url", "OPENAI_BASE_URL", "https://api.openai.com/v1"
            )
        ).rstrip("/"),
    )

    telegram = TelegramConfig(
        bot_token=_required_setting(
            telegram_data, "bot_token", "TELEGRAM_BOT_TOKEN", "telegram.bot_token"
        ),
    )

    defaults = ChatConfig()
    chat = ChatConfig(
        model=str(_setting(chat_data, "model", "OPENAI_MODEL", defaults.model)),
        system_prompt=str(
            _setting(
                chat_data, "system_prompt", "ASSISTANT_PROMPT", defaults.system_prompt
            )
        ),
        max_tokens=_int_setting(
            chat_data, "max_tokens", "MAX_TOKENS", defaults.max_tokens
        ),
        context_message_limit=_int_setting(
            chat_data,
            "context_message_limit",
            "CONTEXT_MESSAGE_LIMIT",
            defaults.context_message_limit,
        ),
        context_ttl_minutes=_int_setting(
            chat_data,
            "context_ttl_minutes",
            "CONTEXT_TTL_MINUTES",
            defaults.context_ttl_minutes,
        ),
    )

    speech_defaults = SpeechConfig()
    speech = SpeechConfig(
        model=str(
            _setting(speech_data, "model", "OPENAI_TTS_MODEL", speech_defaults.model)
        ),
        voice=str(
            _setting(speech_data, "voice", "OPENAI_TTS_VOICE", speech_defaults.voice)
        ),
        format=str(
            _setting(
                speech_data, "format", "OPENAI_TTS_FORMAT", speech_defaults.format
            )
        ),
    )

    image_defaults = ImageConfig()
    image = ImageConfig(
        model=str(
            _setting(image_data, "model", "OPENAI_IMAGE_MODEL", image_defaults.model)
        ),
        size=str(
            _setting(image_data, "size", "OPENAI_IMAGE_SIZE", image_defaults.size)
        ),
        quality=str(
            _setting(
                image_data, "quality", "OPENAI_IMAGE_QUALITY", image_defaults.quality
            )
        ),
        format=str(
            _setting(image_data, "format", "OPENAI_IMAGE_FORMAT", image_defaults.format)
        ),
        background=str(
            _setting(
                image_data,
                "background",
                "OPENAI_IMAGE_BACKGROUND",
                image_defaults.background,
            )
        ),
    )

    access = AccessConfig(
        admin_user_ids=parse_ids(
            _setting(access_data, "admin_user_ids", "ADMIN_USER_IDS", None)
        ),
        allowed_user_ids=parse_ids(
            _setting(
                access_data, "allowed_user_ids", "ALLOWED_TELEGRAM_USER_IDS", None
            )
        ),
        allowed_chat_ids=parse_ids(
            _setting(
                access_data, "allowed_chat_ids", "ALLOWED_TELEGRAM_CHAT_IDS", None
            )
        ),
    )

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = _section(data, "logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        telegram=telegram,
        openai=openai,
        chat=chat,
        speech=speech,
        image=image,
        access=access,
        logging=logging_config,
    )
