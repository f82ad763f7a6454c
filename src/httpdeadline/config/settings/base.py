"""Config settings – Settings base class and the middleware's own settings."""
from __future__ import annotations

import dataclasses

from httpdeadline.config.validation import InvalidSettingValueError

_SOURCES = ("header", "query")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class DeadlineSettings(Settings):
    """Where :class:`DeadlineMiddleware` looks for the caller's deadline.

    Loaded from ``HTTPDEADLINE_SOURCE``, ``HTTPDEADLINE_HEADER_NAME`` and
    ``HTTPDEADLINE_QUERY_PARAM``.
    """

    _prefix: dataclasses.ClassVar[str] = "HTTPDEADLINE"

    source: str = "header"
    header_name: str = "X-Deadline"
    query_param: str = "deadline"

    def _validate(self) -> None:
        self.source = self.source.strip().lower()
        if self.source not in _SOURCES:
            raise InvalidSettingValueError(
                "source", self.source, f"expected one of {', '.join(_SOURCES)}"
            )
        if not self.header_name.strip():
            raise InvalidSettingValueError("header_name", self.header_name, "must not be blank")
        if not self.query_param.strip():
            raise InvalidSettingValueError("query_param", self.query_param, "must not be blank")

    @property
    def field_name(self) -> str:
        """Name of the field read for the configured source."""
        return self.header_name if self.source == "header" else self.query_param


__all__ = ["DeadlineSettings", "Settings"]
