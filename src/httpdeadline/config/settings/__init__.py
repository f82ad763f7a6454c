"""Config settings – env-based configuration."""
from httpdeadline.config.settings.base import DeadlineSettings, Settings
from httpdeadline.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["DeadlineSettings", "EnvSettingsLoader", "Settings", "SettingsLoader"]
