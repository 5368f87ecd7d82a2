"""
Application settings using pydantic-settings.

Loads configuration from environment variables with validation. Connection
options are read from ``MONGO__<FIELD>`` variables, e.g. ``MONGO__URL`` or
``MONGO__POOL_SIZE``.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mongoconn.models.options import ConnectionConfig


def default_connection_config() -> ConnectionConfig:
    """Local development server."""
    return ConnectionConfig(host="localhost", port=27017, database="mongoconn")


class AppSettings(BaseSettings):
    """Application-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = Field(default="mongoconn", description="Application name")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


class Settings(BaseSettings):
    """Main settings container."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    mongo: ConnectionConfig = Field(default_factory=default_connection_config)
    app: AppSettings = Field(default_factory=AppSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()
