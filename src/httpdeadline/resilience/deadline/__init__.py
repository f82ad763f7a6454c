"""Resilience – cancellable execution contexts with deadline propagation via contextvars."""
from httpdeadline.resilience.deadline.context import (
    CancelFunc,
    ExecutionContext,
    background,
    deadline_scope,
    run_until_done,
    with_cancel,
    with_deadline,
)

__all__ = [
    "CancelFunc",
    "ExecutionContext",
    "background",
    "deadline_scope",
    "run_until_done",
    "with_cancel",
    "with_deadline",
]
