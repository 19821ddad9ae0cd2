"""Configuration package."""

from activity_log.config.settings import (
    AppSettings,
    NotionSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "NotionSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
