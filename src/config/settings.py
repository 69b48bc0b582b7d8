"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Telegram configuration
    telegram_bot_token: str = ""  # Empty disables the bot, messages go to the console
    telegram_bot_username: str = "ayhsdvbot"  # Shown to users who must /start first

    # Storage
    chat_ids_path: Path = Path("data/chat_ids.json")

    # Verification settings
    code_ttl_seconds: int = 600  # Verification code validity window, whole minutes

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    @field_validator("code_ttl_seconds")
    @classmethod
    def ttl_in_whole_minutes(cls, value: int) -> int:
        """The code message states the window in minutes."""
        if value <= 0 or value % 60:
            raise ValueError("code_ttl_seconds must be a positive multiple of 60")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
