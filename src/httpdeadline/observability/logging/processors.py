"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import Any

import structlog


class DeadlineProcessor:
    """structlog processor that injects the ambient request deadline.

    Adds ``deadline`` (ISO-8601, UTC) when the current
    :class:`~httpdeadline.resilience.deadline.ExecutionContext` carries one;
    leaves the event untouched otherwise.

    Usage::

        structlog.configure(processors=[DeadlineProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        from httpdeadline.resilience.deadline import ExecutionContext

        deadline = ExecutionContext.current().deadline
        if deadline is not None:
            event_dict.setdefault("deadline", deadline.isoformat())
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger, bound to *initial_values* when given."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["DeadlineProcessor", "get_logger"]
