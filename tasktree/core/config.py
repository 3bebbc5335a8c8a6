"""Configuration management for tasktree."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASKTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Undo History Configuration
    undo_history_limit: int = Field(
        default=50,
        ge=1,
        description="Maximum number of undoable actions kept before the oldest is evicted",
    )

    # Notification Configuration
    toast_duration_ms: int = Field(default=3000, ge=0, description="Display duration for success/info toasts")
    error_toast_duration_ms: int = Field(default=5000, ge=0, description="Display duration for error toasts")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment reported to Logfire")
    log_level: str = Field(default="INFO", description="Root log level for the standard logging module")


# Application Constants
class Constants:
    """Application-wide constants."""

    # Task Validation
    TITLE_MAX_LENGTH: int = 500

    # Toast identifiers
    TOAST_ID_START: int = 1


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
