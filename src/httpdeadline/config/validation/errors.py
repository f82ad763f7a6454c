"""Config errors raised while loading :class:`DeadlineSettings`."""
from __future__ import annotations

from httpdeadline.kernel.errors import BaseError


class ConfigError(BaseError):
    """Settings could not be loaded or converted."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, env_key: str) -> None:
        super().__init__(f"Environment variable {env_key} is required", detail={"env_key": env_key})
        self.env_key = env_key


class InvalidSettingValueError(ConfigError):
    """A setting was read but fails validation (unknown source, blank field name)."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting_name}={value!r} rejected: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
