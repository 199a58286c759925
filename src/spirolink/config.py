"""
Application configuration with environment-driven settings.

Variable names are the ones used by the deployment environment
(OPENAI_API_KEY, EMAIL_USER, EMAIL_PASSWORD, RESEND_API_KEY, PORT, ...).
"""

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spirolink.shared.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "spirolink-backend"
    brand_name: str = "SPIROLINK"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins",
    )

    # Language model
    openai_api_key: str = Field(
        default="",
        description="Hosted chat-completion API key; the service refuses to start without it",
    )
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout_seconds: float = Field(default=30.0, gt=0, le=120)

    # HTTP API mail services (priority order: Resend, then SendGrid)
    resend_api_key: str = Field(default="", description="Primary transactional email API key")
    sendgrid_api_key: str = Field(default="", description="Secondary transactional email API key")
    email_http_timeout_seconds: float = Field(default=10.0, gt=0, le=60)

    # SMTP mail account
    email_user: str = Field(default="", description="SMTP account username (also the sender)")
    email_password: str = Field(default="", description="SMTP account secret")
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_timeout_seconds: float = Field(default=5.0, ge=1, le=30)

    # Addresses
    email_from: str = "noreply@spirolink.com"
    contact_recipient: str = "contact@spirolink.com"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def resend_configured(self) -> bool:
        return bool(self.resend_api_key)

    @property
    def sendgrid_configured(self) -> bool:
        return bool(self.sendgrid_api_key)

    @property
    def smtp_configured(self) -> bool:
        return bool(self.email_user and self.email_password)

    def require_openai_key(self) -> None:
        """Raise ConfigurationError when the mandatory model key is absent."""
        if not self.openai_configured:
            raise ConfigurationError("OPENAI_API_KEY missing")


@lru_cache
def _get_settings_cached() -> Settings:
    return Settings()


def get_settings() -> Settings:
    # Under pytest env vars are monkeypatched per test: never freeze a Settings instance.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return Settings()
    return _get_settings_cached()
