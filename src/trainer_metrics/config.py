"""Application configuration."""

import logging
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    history_limit: int = 100
    due_evaluation_window_days: int = 30

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_log_level(raw: str | None) -> int:
    """Parse a logging level name from env, defaulting to INFO."""
    if raw is None:
        return logging.INFO
    cleaned = raw.strip().upper()
    if cleaned.isdigit():
        return int(cleaned)
    level = logging.getLevelName(cleaned)
    if isinstance(level, int):
        return level
    return logging.INFO
