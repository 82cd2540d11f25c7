"""Configuration package."""

from fintrack.config.settings import (
    LoggingSettings,
    Settings,
    TrackerSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LoggingSettings",
    "Settings",
    "TrackerSettings",
    "get_settings",
    "validate_all_settings",
]
