"""
Gemini Relay Configuration

Settings are read once from the environment (and an optional ``.env`` file)
and then passed explicitly to the client and service.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_PORT, GEMINI_API_BASE_URL


class Settings(BaseSettings):
    """Process configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    port: int = DEFAULT_PORT
    google_api_key: str = ""
    gemini_api_base_url: str = GEMINI_API_BASE_URL
    request_timeout: Optional[float] = None
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings()
