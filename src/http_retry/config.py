"""
Configuration settings for the HTTP retry transports.

All settings are loaded from environment variables with sensible defaults.
Use a .env file for local development.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "http-retry"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON
    HTTP_LOG_LEVEL: str = "WARNING"  # httpx / httpcore stdlib loggers

    # === Retry Policy ===
    RETRY_MAX_RETRIES: int = Field(default=3, ge=0, le=10)
    RETRY_DELAY_SECONDS: float = Field(default=3.0, gt=0, le=180)  # base delay
    RETRY_MAX_DELAY_SECONDS: float = Field(default=180.0, gt=0, le=180)  # cap per wait
    RETRY_ABORT_ON_INTERRUPT: bool = False  # False: resend even if the wait was cut short

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
