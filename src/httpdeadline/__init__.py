"""
httpdeadline – caller-supplied request deadlines for ASGI applications.

Import path convention::

    from httpdeadline.adapters.fastapi import from_header_field, from_query_field
    from httpdeadline.resilience.deadline import ExecutionContext
    from httpdeadline.kernel.errors import InvalidDeadlineError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
