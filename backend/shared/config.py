"""
Centralized configuration for the accounts backend.

All settings are loaded from environment variables with sensible defaults.
Session and reset-token settings drive the account lifecycle rules.
"""

from functools import lru_cache
from typing import Optional
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

    # Application
    app_name: str = "Accounts Service"
    app_version: str = "0.1.0"
    debug: bool = False

    # Storage
    database_url: str = "sqlite:///accounts.db"
    database_echo: bool = False

    # Sessions
    session_duration_seconds: int = Field(default=30, ge=1)

    # Password reset
    reset_token_length: int = Field(default=5, ge=1)

    # Caller identities
    admin_identity: Optional[str] = None
    anonymous_identity: str = "2vxsx-fae"

    # Reclaim leaves the original record behind unless this is enabled
    reclaim_removes_original: bool = False


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
