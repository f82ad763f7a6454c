"""Validation errors – caller input that does not meet the accepted formats."""

from __future__ import annotations

from typing import Any

from httpdeadline.kernel.errors.base import BaseError


class ValidationError(BaseError):
    """Input data does not meet validation rules."""

    default_code = "validation_error"


class InvalidDeadlineError(ValidationError):
    """A deadline field was present but empty or in no accepted layout.

    ``value`` holds the raw string exactly as received; the message quotes at
    most ``ECHO_LIMIT`` characters of it.
    """

    default_code = "invalid_deadline"
    ECHO_LIMIT = 64

    def __init__(self, value: str, message: str | None = None, **kwargs: Any) -> None:
        if message is None:
            shown = _clip(value, self.ECHO_LIMIT)
            message = (
                "Deadline value is empty"
                if value == ""
                else f"Deadline value {shown!r} matches no accepted time layout"
            )
        super().__init__(message, **kwargs)
        self.value = value


def _clip(value: str, limit: int) -> str:
    return value if len(value) <= limit else value[:limit] + "..."


__all__ = ["InvalidDeadlineError", "ValidationError"]
