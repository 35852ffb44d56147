"""
Client configuration using Pydantic Settings.

Loads configuration from environment variables (or a .env file) with
validation. Every field has a default so the module-level instance can
be created without any environment present.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Analytics client settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")

    # Credentials (either a token, or email + password for ClientLogin)
    GA_EMAIL: str = Field(default="")
    GA_PASSWORD: str = Field(default="")
    GA_AUTH_TOKEN: str = Field(default="")

    # Request behaviour
    GA_DEV_MODE: bool = Field(
        default=False,
        description="Ask the feed endpoints for pretty-printed XML"
    )
    GA_INTERFACE_NAME: str = Field(
        default="ga-feed-client v0.1",
        description="Value sent as 'source' during ClientLogin"
    )
    GA_REQUEST_TIMEOUT: float = Field(default=30.0, gt=0)

    # Endpoints
    GA_CLIENT_LOGIN_URL: str = Field(default="https://www.google.com/accounts/ClientLogin")
    GA_ACCOUNT_FEED_URL: str = Field(
        default="https://www.google.com/analytics/feeds/accounts/default"
    )
    GA_REPORT_FEED_URL: str = Field(default="https://www.google.com/analytics/feeds/data")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure LOG_LEVEL names a standard logging level."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level


# Global settings instance
settings = Settings()
