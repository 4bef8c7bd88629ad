"""
Chain execution engine.

Serializes the effects of fluent calls made on one host object. Every
effect-producing call goes through a single FIFO queue; a task only starts
once the previous one has signaled completion, so asynchronous and
synchronous calls interleave in program order.

Synchronous faults (exceptions raised while a task is being invoked) and
asynchronous faults (``done(error)``) are treated differently when no error
handler is registered: the former propagate to the draining caller, the
latter are logged and dropped while the chain keeps draining. Existing
chains rely on this difference.
"""

import asyncio
import functools
from collections import deque
from typing import Any, Deque, Generic, Optional, TypeVar

from loguru import logger

from ..schemas.chains import ChainSnapshot, ChainStatus
from ..settings import ChainSettings
from .tasks import (
    AsyncMethod,
    Done,
    ErrorHandler,
    SyncMethod,
    Task,
    bind_callback,
    bind_coroutine,
    bind_sync,
    ensure_callable,
    is_coroutine_method,
    optional_error,
    task_name,
)

T = TypeVar("T")


class Chain(Generic[T]):
    """Task queue and drain loop owned by a single host object.

    The chain holds the host by reference and every fluent operation returns
    it, so hosts can expose the chain's methods as their own.
    """

    def __init__(self, host: T, settings: Optional[ChainSettings] = None) -> None:
        """
        Initialize an idle chain.

        Args:
            host: The object whose fluent API this chain serializes.
            settings: Diagnostics settings; defaults when None.
        """
        self._host = host
        self._settings = settings or ChainSettings()
        self._queue: Deque[Task] = deque()
        self._pending_count = 0
        self._error_handler: Optional[ErrorHandler] = None
        self._draining = False

    # ==================== Introspection ====================

    @property
    def host(self) -> T:
        return self._host

    @property
    def pending_count(self) -> int:
        return self._pending_count

    @property
    def idle(self) -> bool:
        """True when no task is in flight and none is waiting."""
        return self._pending_count == 0 and not self._queue

    def snapshot(self) -> ChainSnapshot:
        return ChainSnapshot(
            pending_count=self._pending_count,
            queued=len(self._queue),
            has_error_handler=self._error_handler is not None,
            status=ChainStatus.IDLE if self._pending_count == 0 else ChainStatus.DRAINING,
        )

    def __repr__(self) -> str:
        return (
            f"Chain(host={type(self._host).__name__}, pending={self._pending_count}, "
            f"queued={len(self._queue)})"
        )

    # ==================== Queue Primitives ====================

    def then(self, task: Task) -> T:
        """
        Append a task and start draining if nothing is in flight.

        Args:
            task: Callable taking a ``done`` callback it must call exactly once.

        Returns:
            The host object, for chaining.

        Raises:
            TaskSignatureError: If task is not callable.
            Exception: Whatever a task raises synchronously, when no error
                handler is registered and this call ends up draining it.
        """
        ensure_callable(task, "Task")
        self._queue.append(task)
        self._trace("enqueued", task)
        if self._pending_count == 0:
            self._advance()
        return self._host

    def finally_(self, callback: Any) -> None:
        """
        Register a barrier callback that runs once everything queued before it
        has completed.

        The callback receives no argument. When it runs the chain is idle
        again, so calls made from inside it take the fast path. Anything
        queued behind the barrier drains after the callback returns.

        Not fluent on purpose: the chain should not be extended until the
        callback has fired.
        """
        ensure_callable(callback, "Finally callback")

        def barrier(done: Done) -> None:
            self._pending_count -= 1
            callback()
            self._advance()

        barrier.__qualname__ = f"finally[{task_name(callback)}]"
        self._queue.append(barrier)
        self._trace("enqueued", barrier)
        if self._pending_count == 0:
            self._advance()

    def on_error(self, handler: ErrorHandler) -> T:
        """
        Set the error handler, replacing any previous one.

        The handler receives the error once; the remaining queue is discarded
        before it is called.
        """
        ensure_callable(handler, "Error handler")
        self._error_handler = handler
        return self._host

    def wait(self) -> "asyncio.Future[None]":
        """
        Return a future resolved when the work queued so far has drained.

        Built on finally_(). A chain abandoned by an error handler never
        resolves the future.

        Raises:
            RuntimeError: If no event loop is running.
        """
        loop = asyncio.get_running_loop()
        future: "asyncio.Future[None]" = loop.create_future()

        def _resolve() -> None:
            if not future.done():
                future.set_result(None)

        self.finally_(_resolve)
        return future

    # ==================== Method Adapters ====================

    def asyncify(self, method: SyncMethod) -> SyncMethod:
        """
        Wrap a synchronous fluent method.

        While the chain is idle the wrapper calls the method right away and
        returns its result. Otherwise the call is queued behind the pending
        work and the host is returned immediately.
        """
        ensure_callable(method, "Synchronous method")

        @functools.wraps(method)
        def asyncified(*args: Any, **kwargs: Any) -> Any:
            if self.idle:
                return method(*args, **kwargs)
            return self.then(bind_sync(method, args, kwargs))

        return asyncified

    def async_(self, method: AsyncMethod) -> AsyncMethod:
        """
        Wrap an asynchronous fluent method.

        The method takes a trailing ``done`` callback supplied by the chain.
        ``async def`` methods are also accepted: they run on the current event
        loop and complete the task when the coroutine finishes. Calls are
        always queued, even on an idle chain.
        """
        ensure_callable(method, "Asynchronous method")
        binder = bind_coroutine if is_coroutine_method(method) else bind_callback

        @functools.wraps(method)
        def async_method(*args: Any, **kwargs: Any) -> T:
            return self.then(binder(method, args, kwargs))

        return async_method

    # ==================== Drain Loop ====================

    def _advance(self) -> None:
        """
        Run queued tasks until one suspends or the queue is empty.

        A ``done`` fired while this loop is running only updates the counter;
        the loop itself picks up the next task, keeping the stack flat for
        long synchronous runs.
        """
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue and self._pending_count == 0:
                task = self._queue.popleft()
                self._pending_count += 1
                self._trace("started", task)
                try:
                    task(self._completion(task))
                except Exception as exc:
                    logger.debug(f"Task {task_name(task)} raised {type(exc).__name__}: {exc}")
                    self._abandon()
                    if self._error_handler is None:
                        raise
                    self._error_handler(exc)
        finally:
            self._draining = False

    def _completion(self, task: Task) -> Done:
        def done(error: Optional[BaseException] = None) -> None:
            error = optional_error(error)
            if error is not None and self._error_handler is not None:
                logger.debug(f"Task {task_name(task)} failed: {error!r}; abandoning chain")
                self._abandon()
                self._error_handler(error)
                return
            if error is not None and self._settings.log_swallowed_errors:
                logger.warning(
                    f"Task {task_name(task)} failed with no error handler registered; "
                    f"continuing chain: {error!r}"
                )
            self._pending_count -= 1
            self._trace("completed", task)
            self._advance()

        return done

    def _abandon(self) -> None:
        dropped = len(self._queue)
        self._queue.clear()
        self._pending_count = 0
        if dropped:
            logger.debug(f"Chain abandoned, {dropped} queued task(s) discarded")

    def _trace(self, event: str, task: Task) -> None:
        if self._settings.trace_tasks:
            logger.debug(
                f"{event} {task_name(task)} (pending={self._pending_count}, queued={len(self._queue)})"
            )
