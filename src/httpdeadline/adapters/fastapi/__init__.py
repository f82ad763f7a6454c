"""FastAPI adapter – deadline middleware and execution-context dependency."""
from httpdeadline.adapters.fastapi.deps import ExecutionContextDep, current_execution_context
from httpdeadline.adapters.fastapi.middleware import (
    DeadlineMiddleware,
    FieldSource,
    from_header_field,
    from_query_field,
)

__all__ = [
    "DeadlineMiddleware",
    "ExecutionContextDep",
    "FieldSource",
    "current_execution_context",
    "from_header_field",
    "from_query_field",
]
