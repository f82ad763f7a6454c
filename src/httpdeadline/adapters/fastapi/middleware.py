"""FastAPI adapter – ASGI middleware that imposes caller-supplied deadlines.

``from_header_field``  reads the deadline from a request header
``from_query_field``   reads the deadline from a query parameter

Both wrap an ASGI application in a :class:`DeadlineMiddleware`.  A request
whose field is absent passes through with the ambient
:class:`ExecutionContext` untouched; a request whose field holds one of the
accepted HTTP time layouts runs inside a child context bounded by that
instant; any other value is answered with ``400`` and never reaches the
wrapped application.
"""
from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Iterable

from starlette.datastructures import Headers, QueryParams

from httpdeadline.kernel.errors import InvalidDeadlineError
from httpdeadline.kernel.time import ACCEPTED_LAYOUTS, TimeLayout, parse_http_time
from httpdeadline.observability.logging import get_logger
from httpdeadline.resilience.deadline import ExecutionContext, with_deadline

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from httpdeadline.config.settings import DeadlineSettings

logger = get_logger(__name__)


class FieldSource(str, enum.Enum):
    """Where the raw deadline value is read from."""

    HEADER = "header"
    QUERY = "query"


class DeadlineMiddleware:
    """Derive a per-request deadline from a named header or query parameter.

    Parameters
    ----------
    app:
        The inner ASGI application.
    field_name:
        Header name (matched case-insensitively) or query parameter name.
    source:
        :attr:`FieldSource.HEADER` (default) or :attr:`FieldSource.QUERY`.
    layouts:
        Accepted timestamp layouts in priority order.
    """

    def __init__(
        self,
        app: "ASGIApp",
        field_name: str,
        source: FieldSource | str = FieldSource.HEADER,
        layouts: Iterable[TimeLayout] = ACCEPTED_LAYOUTS,
    ) -> None:
        if not field_name:
            raise ValueError("DeadlineMiddleware requires a non-empty field name")
        self.app = app
        self.field_name = field_name
        self.source = FieldSource(source)
        self._layouts = tuple(layouts)

    @classmethod
    def from_settings(cls, app: "ASGIApp", settings: "DeadlineSettings") -> "DeadlineMiddleware":
        """Build the middleware from loaded :class:`DeadlineSettings`."""
        return cls(app, settings.field_name, settings.source)

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        raw = self._lookup(scope)
        if raw is None:
            await self.app(scope, receive, send)
            return

        try:
            deadline = parse_http_time(raw, self._layouts)
        except InvalidDeadlineError as exc:
            logger.info(
                "deadline.rejected",
                field=self.field_name,
                source=self.source.value,
                reason=exc.message,
            )
            await _reject(send, exc)
            return

        ctx, cancel = with_deadline(ExecutionContext.current(), deadline)
        token = ExecutionContext.attach(ctx)
        try:
            logger.debug(
                "deadline.applied",
                field=self.field_name,
                source=self.source.value,
                deadline=deadline.isoformat(),
            )
            await self.app(scope, receive, send)
        finally:
            ExecutionContext.detach(token)
            cancel()

    def _lookup(self, scope: "Scope") -> str | None:
        """Return the first value of the field, or ``None`` when the key is absent."""
        if self.source is FieldSource.HEADER:
            headers = Headers(scope=scope)
            if self.field_name not in headers:
                return None
            return headers[self.field_name]

        params = QueryParams(scope.get("query_string", b""))
        values = params.getlist(self.field_name)
        if not values:
            return None
        return values[0]


async def _reject(send: "Send", exc: InvalidDeadlineError) -> None:
    body = exc.to_json_body()
    await send({"type": "http.response.start", "status": 400, "headers": [
        (b"content-type", b"application/json"),
        (b"content-length", str(len(body)).encode()),
    ]})
    await send({"type": "http.response.body", "body": body})


def from_header_field(name: str, app: "ASGIApp") -> DeadlineMiddleware:
    """Wrap *app* so the header *name* sets the request deadline."""
    return DeadlineMiddleware(app, name, FieldSource.HEADER)


def from_query_field(name: str, app: "ASGIApp") -> DeadlineMiddleware:
    """Wrap *app* so the query parameter *name* sets the request deadline."""
    return DeadlineMiddleware(app, name, FieldSource.QUERY)


__all__ = [
    "DeadlineMiddleware",
    "FieldSource",
    "from_header_field",
    "from_query_field",
]
