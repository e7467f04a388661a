from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    This uses pydantic-settings so that we get type validation and defaults.
    Settings are loaded from environment variables with optional .env file override.
    """

    # App basics
    ENV: Literal["development", "staging", "production"] = "development"
    """Environment mode: affects logging output."""

    DEBUG: bool = True
    """Enable debug mode: verbose logging."""

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    """Minimum level passed through to the console."""

    STORE_NAME: str = "Example Store"
    """Store name shown in email headers and footers."""

    # Preview
    PREVIEW_ENABLED: bool = True
    """Serve email previews over HTTP. Disable in locked-down production installs."""

    EARLY_RENEWAL_ENABLED: bool = True
    """Whether customers may renew a subscription before its next payment date."""

    # Model config
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing .env repeatedly."""
    return Settings()
