"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from decimal import Decimal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.config.constants import (
    DEFAULT_MIN_PAYOUT_AMOUNT,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Payments API (channel catalog, field schemas, submission)
    payout_api_url: str
    payout_api_token: str | None = None
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP timeout for payments API calls in seconds"
    )

    # Payout rules
    min_payout_amount: Decimal = Field(
        default=DEFAULT_MIN_PAYOUT_AMOUNT,
        gt=0,
        description="Minimum amount a balance source must hold to open a payout"
    )

    # Telegram notifications (optional)
    telegram_bot_token: str | None = None

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = "logs/payout.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("payout_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize API base URL so paths can be joined with '/'."""
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("PAYOUT_API_URL must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case log level for loguru."""
        return value.upper()

    @model_validator(mode='after')
    def validate_production(self) -> 'Settings':
        """Validate production-specific requirements."""
        if self.environment == 'production':
            # DEBUG must be False in production
            if self.debug:
                raise ValueError(
                    'DEBUG must be False in production environment. '
                    'Set DEBUG=false in your .env file.'
                )

            if not self.payout_api_url.startswith("https://"):
                raise ValueError(
                    'PAYOUT_API_URL must use https in production. '
                    'Set the payments API URL in .env file.'
                )

        return self


settings = Settings()
