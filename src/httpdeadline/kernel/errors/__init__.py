"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ValidationError          (validation.py)
    │   └── InvalidDeadlineError
    └── CancellationError        (cancellation.py)
        ├── ContextCancelledError
        └── DeadlineExceededError
"""

from httpdeadline.kernel.errors.base import BaseError
from httpdeadline.kernel.errors.cancellation import (
    CancellationError,
    ContextCancelledError,
    DeadlineExceededError,
)
from httpdeadline.kernel.errors.validation import InvalidDeadlineError, ValidationError

__all__ = [
    "BaseError",
    "CancellationError",
    "ContextCancelledError",
    "DeadlineExceededError",
    "InvalidDeadlineError",
    "ValidationError",
]
