"""Cancellation errors – reported by a done :class:`ExecutionContext`."""

from __future__ import annotations

from typing import Any

from httpdeadline.kernel.errors.base import BaseError


class CancellationError(BaseError):
    """The unit of work was asked to stop."""

    default_code = "cancelled"


class ContextCancelledError(CancellationError):
    """The context (or one of its ancestors) was cancelled explicitly."""

    default_code = "context_cancelled"

    def __init__(self, message: str = "Context cancelled", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class DeadlineExceededError(CancellationError):
    """The context's deadline has passed."""

    default_code = "deadline_exceeded"

    def __init__(self, message: str = "Deadline exceeded", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = ["CancellationError", "ContextCancelledError", "DeadlineExceededError"]
