"""Settings validation package."""

from fintrack.validation.validator import SettingsValidator

__all__ = ["SettingsValidator"]
