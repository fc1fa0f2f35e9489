"""
Configuration Settings
======================

Centralized configuration using Pydantic V2 Settings.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from usersdb.core.constants import DATA_DIRNAME, DATABASE_FILENAME

SQLITE_JOURNAL_MODES = ("DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF")


def default_database_url() -> str:
    """SQLite URL of the per-user store file, independent of the working directory."""
    path = Path.home() / DATA_DIRNAME / DATABASE_FILENAME
    return f"sqlite:///{path.resolve()}"


def normalize_log_level(value: str) -> str:
    """Upper-case a logging level name, rejecting unknown ones."""
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {value}")
    return level


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_env: str = Field(default="development")
    app_debug: bool = Field(default=False)
    database_url: str = Field(default_factory=default_database_url)
    log_level: str = Field(default="INFO")
    sqlite_journal_mode: str = Field(default="WAL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one the logging module knows."""
        return normalize_log_level(v)

    @field_validator("sqlite_journal_mode")
    @classmethod
    def validate_journal_mode(cls, v: str) -> str:
        """Ensure the journal mode is one SQLite accepts."""
        mode = v.upper()
        if mode not in SQLITE_JOURNAL_MODES:
            raise ValueError(
                f"sqlite_journal_mode must be one of {', '.join(SQLITE_JOURNAL_MODES)}, got {v}"
            )
        return mode

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings


def print_settings(current: Settings = None) -> None:
    """Print the active configuration."""
    current = current or settings
    print("=" * 60)
    print("⚙️  usersdb settings")
    print("=" * 60)
    for name, value in current.model_dump().items():
        print(f"  {name:<20} {value}")
    print("=" * 60)
