"""FastAPI adapter – dependency exposing the ambient execution context."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from httpdeadline.resilience.deadline import ExecutionContext


async def current_execution_context() -> ExecutionContext:
    """Return the context the deadline middleware attached for this request.

    Declared ``async`` so FastAPI resolves it on the request's own task,
    where the middleware's context variable is visible.
    """
    return ExecutionContext.current()


ExecutionContextDep = Annotated[ExecutionContext, Depends(current_execution_context)]


__all__ = ["ExecutionContextDep", "current_execution_context"]
