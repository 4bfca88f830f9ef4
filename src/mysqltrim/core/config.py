"""Configuration management.

Uses pydantic-settings for type-safe configuration from environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings can be overridden via environment variables.
    Prefix: MYSQLTRIM_
    """

    model_config = SettingsConfigDict(
        env_prefix="MYSQLTRIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Reading
    read_buffer_size: int = Field(
        default=64 * 1024,
        description="Buffer size in bytes used when opening dump files",
    )

    # Split extraction
    split_extension: str = Field(
        default=".sql",
        description="File suffix for per-table files written in split mode",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="WARNING")
    log_format: Literal["console", "json"] = Field(default="console")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
