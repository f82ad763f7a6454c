from __future__ import annotations

import asyncio
import contextlib
import inspect
import threading
from contextvars import ContextVar, Token
from datetime import datetime
from typing import Any, Awaitable, Callable, Iterator, TypeVar

from httpdeadline.kernel.errors import (
    CancellationError,
    ContextCancelledError,
    DeadlineExceededError,
)
from httpdeadline.kernel.time import Clock, SystemClock

__all__ = [
    "CancelFunc",
    "ExecutionContext",
    "background",
    "deadline_scope",
    "run_until_done",
    "with_cancel",
    "with_deadline",
]

T = TypeVar("T")

CancelFunc = Callable[[], None]


class ExecutionContext:
    """Cancellable handle for one unit of work, with an optional deadline.

    Contexts form a tree.  A child never outlives its parent: its effective
    deadline is the earlier of its own and the parent's, and cancelling a
    parent cancels every live child.  Deadline expiry is evaluated lazily
    against the context's clock whenever :meth:`done` or :meth:`err` is
    consulted, so no timer threads are involved.

    Instances are created through :func:`background`, :func:`with_cancel`
    and :func:`with_deadline`; the ambient context of the current task is
    read with :meth:`current`.
    """

    def __init__(
        self,
        parent: ExecutionContext | None = None,
        deadline: datetime | None = None,
        *,
        clock: Clock | None = None,
        cancellable: bool = True,
    ) -> None:
        if deadline is not None and deadline.tzinfo is None:
            raise ValueError("ExecutionContext deadline must be timezone-aware")
        self._parent = parent
        self._clock: Clock = clock or (parent._clock if parent is not None else SystemClock())
        if parent is not None and parent.deadline is not None:
            if deadline is None or parent.deadline < deadline:
                deadline = parent.deadline
        self._deadline = deadline
        self._cancellable = cancellable
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._err: CancellationError | None = None
        self._children: set[ExecutionContext] = set()
        self._waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Future[None]]] = []

    def __repr__(self) -> str:
        state = "done" if self._done.is_set() else "live"
        return f"ExecutionContext(deadline={self._deadline!r}, state={state})"

    # ------------------------------------------------------------------
    # Ambient storage
    # ------------------------------------------------------------------

    @staticmethod
    def current() -> ExecutionContext:
        """Return the ambient context, or the background root when none is attached."""
        ctx = _CTX_VAR.get()
        return ctx if ctx is not None else _BACKGROUND

    @staticmethod
    def attach(ctx: ExecutionContext) -> Token[ExecutionContext | None]:
        return _CTX_VAR.set(ctx)

    @staticmethod
    def detach(token: Token[ExecutionContext | None]) -> None:
        _CTX_VAR.reset(token)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def deadline(self) -> datetime | None:
        return self._deadline

    @property
    def parent(self) -> ExecutionContext | None:
        return self._parent

    @property
    def child_count(self) -> int:
        """Number of live children registered for cancellation propagation."""
        with self._lock:
            return len(self._children)

    def remaining_seconds(self) -> float | None:
        """Seconds until the deadline (never negative), or ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, (self._deadline - self._clock.now()).total_seconds())

    def done(self) -> bool:
        """True once cancelled or once the deadline has elapsed."""
        if self._done.is_set():
            return True
        if self._deadline is not None and self._clock.now() >= self._deadline:
            self._signal(DeadlineExceededError())
            return True
        return False

    def err(self) -> CancellationError | None:
        """Return why the context is done, or ``None`` while it is live."""
        if not self.done():
            return None
        return self._err

    def raise_if_done(self) -> None:
        err = self.err()
        if err is not None:
            raise err

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the context is done or *timeout* elapses.

        Returns :meth:`done` at the moment the wait ends.
        """
        remaining = self.remaining_seconds()
        limit = timeout
        if remaining is not None:
            limit = remaining if limit is None else min(limit, remaining)
        if not self.done():
            self._done.wait(limit)
        return self.done()

    async def wait_async(self) -> None:
        """Suspend the calling task until the context is done."""
        if self.done():
            return
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()
        entry = (loop, waiter)
        with self._lock:
            self._waiters.append(entry)
        try:
            while not self.done():
                remaining = self.remaining_seconds()
                if remaining is None:
                    await waiter
                else:
                    with contextlib.suppress(asyncio.TimeoutError):
                        await asyncio.wait_for(asyncio.shield(waiter), timeout=remaining)
                    if waiter.done():
                        continue
                    # A frozen clock has not reached the deadline yet; poll again.
                    await asyncio.sleep(0)
        finally:
            with self._lock:
                if entry in self._waiters:
                    self._waiters.remove(entry)
            if not waiter.done():
                waiter.cancel()

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def _cancel(self, err: CancellationError) -> None:
        """Signal *err* and drop the registration held by the parent."""
        self._signal(err)
        parent = self._parent
        if parent is not None:
            with parent._lock:
                parent._children.discard(self)

    def _signal(self, err: CancellationError) -> None:
        if not self._cancellable:
            return
        with self._lock:
            if self._done.is_set():
                return
            self._err = err
            self._done.set()
            children = list(self._children)
            self._children.clear()
            waiters = list(self._waiters)
            self._waiters.clear()
        for child in children:
            child._signal(err)
        for loop, waiter in waiters:
            if not loop.is_closed():
                loop.call_soon_threadsafe(_resolve, waiter)

    def _register(self, child: ExecutionContext) -> None:
        if not self._cancellable:
            return
        with self._lock:
            if not self._done.is_set():
                self._children.add(child)
                return
        child._signal(self._err or ContextCancelledError())


def _resolve(waiter: asyncio.Future[None]) -> None:
    if not waiter.done():
        waiter.set_result(None)


_BACKGROUND = ExecutionContext(cancellable=False)
_CTX_VAR: ContextVar[ExecutionContext | None] = ContextVar("_httpdeadline_ctx", default=None)


def background() -> ExecutionContext:
    """Return the root context: never cancelled, no deadline."""
    return _BACKGROUND


def with_cancel(parent: ExecutionContext) -> tuple[ExecutionContext, CancelFunc]:
    """Derive a cancellable child of *parent*.

    The returned ``cancel`` must be called once the work it guards finishes;
    extra calls are no-ops.
    """
    child = ExecutionContext(parent)
    parent._register(child)

    def cancel() -> None:
        child._cancel(ContextCancelledError())

    return child, cancel


def with_deadline(
    parent: ExecutionContext,
    when: datetime,
) -> tuple[ExecutionContext, CancelFunc]:
    """Derive a child of *parent* that is done no later than *when*.

    A *when* already in the past yields a child that reports
    :class:`DeadlineExceededError` straight away.
    """
    if when.tzinfo is None:
        raise ValueError("with_deadline requires a timezone-aware datetime")
    child = ExecutionContext(parent, when)
    parent._register(child)
    child.done()

    def cancel() -> None:
        child._cancel(ContextCancelledError())

    return child, cancel


@contextlib.contextmanager
def deadline_scope(
    when: datetime,
    parent: ExecutionContext | None = None,
) -> Iterator[ExecutionContext]:
    """Attach a deadline-bounded child as the ambient context for the block.

    On exit, by any path, the previous ambient context is restored and the
    child is released.
    """
    ctx, cancel = with_deadline(parent or ExecutionContext.current(), when)
    token = ExecutionContext.attach(ctx)
    try:
        yield ctx
    finally:
        ExecutionContext.detach(token)
        cancel()


async def run_until_done(coro: Awaitable[T], ctx: ExecutionContext | None = None) -> T:
    """Await *coro*, abandoning it once *ctx* (default: ambient) is done.

    Raises the context's :class:`CancellationError` when the context finishes
    first; the task running *coro* is cancelled in that case.
    """
    ctx = ctx or ExecutionContext.current()
    if ctx.done():
        if inspect.iscoroutine(coro):
            coro.close()
        raise ctx.err()  # type: ignore[misc]
    work: asyncio.Future[Any] = asyncio.ensure_future(coro)
    watcher = asyncio.ensure_future(ctx.wait_async())
    try:
        await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        work.cancel()
        raise
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher
    if work.done():
        return work.result()
    work.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await work
    raise ctx.err()  # type: ignore[misc]
