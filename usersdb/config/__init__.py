"""
Configuration package.

Exports the settings instance for easy importing.

Usage:
    from usersdb.config import settings

    print(settings.database_url)
"""

from usersdb.config.settings import (
    Settings,
    settings,
    get_settings,
    print_settings,
    default_database_url,
    normalize_log_level,
)

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "print_settings",
    "default_database_url",
    "normalize_log_level",
]
