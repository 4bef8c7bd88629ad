"""
Task shapes and adapters.

A task is any callable taking a single ``done`` completion callback. Calling
``done()`` signals success, ``done(error)`` signals an asynchronous fault.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional, Set

from .exceptions import TaskSignatureError

# ==================== Type Aliases ====================

Done = Callable[..., None]
Task = Callable[[Done], Any]
ErrorHandler = Callable[[BaseException], Any]
SyncMethod = Callable[..., Any]
AsyncMethod = Callable[..., Any]
CoroutineMethod = Callable[..., Awaitable[Any]]

# Strong references to scheduled coroutine tasks; the event loop keeps only weak ones.
_running: Set["asyncio.Task[Any]"] = set()


def ensure_callable(value: Any, role: str) -> None:
    """
    Check that a value handed to the engine can be called.

    Args:
        value: The task, handler or method to check.
        role: Human readable role used in the error message.

    Raises:
        TaskSignatureError: If value is not callable.
    """
    if not callable(value):
        raise TaskSignatureError(f"{role} must be callable, got {type(value).__name__}")


def is_coroutine_method(method: Any) -> bool:
    """Return True for ``async def`` functions and bound methods."""
    return inspect.iscoroutinefunction(method)


def task_name(task: Any) -> str:
    return getattr(task, "__qualname__", None) or getattr(task, "__name__", None) or repr(task)


def bind_coroutine(method: CoroutineMethod, args: tuple, kwargs: dict) -> Task:
    """
    Adapt a coroutine function call into a done-callback task.

    The coroutine is scheduled on the running event loop when the task is
    dequeued. Its exception, if any, is passed to ``done``; cancellation is
    reported as an ``asyncio.CancelledError``.

    Raises (at task invocation):
        RuntimeError: If no event loop is running.
    """

    def coroutine_task(done: Done) -> None:
        loop = asyncio.get_running_loop()
        future = loop.create_task(method(*args, **kwargs))
        _running.add(future)

        def _finished(fut: "asyncio.Task[Any]") -> None:
            _running.discard(fut)
            if fut.cancelled():
                done(asyncio.CancelledError())
                return
            done(fut.exception())

        future.add_done_callback(_finished)

    coroutine_task.__qualname__ = f"coroutine_task[{task_name(method)}]"
    return coroutine_task


def bind_callback(method: AsyncMethod, args: tuple, kwargs: dict) -> Task:
    """Adapt ``method(*args, done, **kwargs)`` into a done-callback task."""

    def callback_task(done: Done) -> None:
        method(*args, done, **kwargs)

    callback_task.__qualname__ = f"callback_task[{task_name(method)}]"
    return callback_task


def bind_sync(method: SyncMethod, args: tuple, kwargs: dict) -> Task:
    """Adapt a deferred synchronous call into a task that completes inline."""

    def sync_task(done: Done) -> None:
        method(*args, **kwargs)
        done()

    sync_task.__qualname__ = f"sync_task[{task_name(method)}]"
    return sync_task


def optional_error(error: Optional[BaseException]) -> Optional[BaseException]:
    """Normalize falsy completion values (``None``, ``False``) to ``None``."""
    return error if error else None
