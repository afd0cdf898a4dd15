"""Application settings management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global settings loaded from environment variables."""

    app_name: str = "Notes Bot"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    messaging_provider: Literal["mock", "telegram"] = "mock"
    telegram_bot_token: str | None = Field(default=None, alias="TELEGRAM_BOT_TOKEN")
    telegram_api_url: str = Field(default="https://api.telegram.org", alias="TELEGRAM_API_URL")

    polling_enabled: bool = False
    polling_timeout_seconds: int = Field(default=60, ge=0)
    polling_retry_seconds: float = Field(default=5.0, ge=0)

    max_concurrent_messages: int = Field(default=64, ge=1)
    conversation_ttl_seconds: float = Field(default=900.0, ge=0)
    strict_tag_arguments: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
        populate_by_name=True,
    )


settings = Settings()
