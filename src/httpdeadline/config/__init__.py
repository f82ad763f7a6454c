"""Config – 12-factor settings for the deadline middleware."""

from httpdeadline.config.settings import DeadlineSettings, EnvSettingsLoader, Settings, SettingsLoader
from httpdeadline.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DeadlineSettings",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
