"""設定データクラス"""

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass
class TelegramConfig:
    """Telegram接続設定"""

    bot_token: str


@dataclass
class OpenAIConfig:
    """OpenAI互換API接続設定"""

    api_key: str
    base_url: str = "https://api.openai.com/v1"


@dataclass
class ChatConfig:
    """チャット設定

    Attributes:
        model: 補完モデル名
        system_prompt: システムプロンプト
        max_tokens: 最大出力トークン数
        context_message_limit: 履歴として送るメッセージ数の上限
        context_ttl_minutes: 履歴として送るメッセージの有効期限（分）
    """

    model: str = "gpt-5.1"
    system_prompt: str = "You are telegram bot assistant"
    max_tokens: int = 4096
    context_message_limit: int = 20
    context_ttl_minutes: int = 120

    @property
    def context_ttl(self) -> timedelta:
        """履歴の有効期限"""
        return timedelta(minutes=self.context_ttl_minutes)


@dataclass
class SpeechConfig:
    """音声合成設定"""

    model: str = "gpt-4o-mini-tts"
    voice: str = "alloy"
    format: str = "opus"


@dataclass
class ImageConfig:
    """画像生成設定"""

    model: str = "gpt-5.1"
    size: str = "auto"
    quality: str = "auto"
    format: str = "png"
    background: str = "auto"


@dataclass
class AccessConfig:
    """アクセス制御設定

    Attributes:
        admin_user_ids: 常に許可されるユーザーID
        allowed_user_ids: 許可ユーザーID（空なら制限なし）
        allowed_chat_ids: 許可チャットID（空なら制限なし）
    """

    admin_user_ids: list[int] = field(default_factory=list)
    allowed_user_ids: list[int] = field(default_factory=list)
    allowed_chat_ids: list[int] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    telegram: TelegramConfig
    openai: OpenAIConfig
    chat: ChatConfig = field(default_factory=ChatConfig)
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    image: ImageConfig = field(default_factory=ImageConfig)
    access: AccessConfig = field(default_factory=AccessConfig)
    logging: LoggingConfig | None = None
