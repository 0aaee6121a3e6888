"""Channel relay bot configuration settings."""

from typing import Any, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


class TelegramSettings(BaseSettings):
    """Telegram Bot API configuration settings."""

    BOT_TOKEN: str = Field(default="", alias="TELEGRAM_BOT_TOKEN")
    TARGET_CHAT_ID: Optional[int] = Field(default=None, alias="TARGET_CHAT_ID")
    ADMIN_IDS: str = Field(default="", alias="ADMIN_IDS")
    API_URL: str = Field(default="https://api.telegram.org", alias="TELEGRAM_API_URL")
    TIMEOUT_SECONDS: int = Field(default=10, alias="TELEGRAM_TIMEOUT_SECONDS")
    WEBHOOK_SECRET: str = Field(default="", alias="TELEGRAM_WEBHOOK_SECRET")

    @field_validator("TARGET_CHAT_ID", mode="before")
    @classmethod
    def _parse_target_chat_id(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @property
    def admin_ids(self) -> frozenset[int]:
        """Administrator user ids parsed from the comma separated ADMIN_IDS.

        Blank and non-numeric entries are skipped.
        """
        ids = set()
        for raw in self.ADMIN_IDS.split(","):
            raw = raw.strip()
            if not raw:
                continue
            try:
                ids.add(int(raw))
            except ValueError:
                logger.warning("admin_id_ignored", value=raw)
        return frozenset(ids)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


class RelaySettings(BaseSettings):
    """Relay behaviour settings."""

    DEDUP_WINDOW_MS: int = Field(default=10 * 60 * 1000, alias="DEDUP_WINDOW_MS")
    UPDATE_MARKER: str = Field(default="💌 updated", alias="UPDATE_MARKER")
    PANEL_LABEL_BUDGET: int = Field(default=30, alias="PANEL_LABEL_BUDGET")
    NOTIFY_MAX_WORKERS: int = Field(default=5, alias="NOTIFY_MAX_WORKERS")
    KICK_MAX_WORKERS: int = Field(default=10, alias="KICK_MAX_WORKERS")
    KICK_UNBAN_AFTER: bool = Field(default=True, alias="KICK_UNBAN_AFTER")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


class AwsSettings(BaseSettings):
    """AWS configuration settings."""

    AWS_REGION: str = Field(default="ca-central-1", alias="AWS_REGION")

    THROTTLING_ERRS: list[str] = [
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "ProvisionedThroughputExceededException",
    ]
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class PersistenceSettings(BaseSettings):
    """Relay state persistence settings."""

    STATE_TABLE: str = Field(default="relay_state", alias="STATE_TABLE")
    STATE_KEY: str = Field(default="state:v1", alias="STATE_KEY")
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


class ServerSettings(BaseSettings):
    """Server configuration settings."""

    KICK_API_TOKEN: str = Field(default="", alias="KICK_API_TOKEN")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Channel relay bot configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Server settings
    server: ServerSettings

    # Integration settings
    telegram: TelegramSettings
    aws: AwsSettings
    persistence: PersistenceSettings

    # Functionality settings
    relay: RelaySettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "server": ServerSettings,
            "telegram": TelegramSettings,
            "aws": AwsSettings,
            "persistence": PersistenceSettings,
            "relay": RelaySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
