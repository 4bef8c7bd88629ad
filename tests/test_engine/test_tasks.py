import asyncio

import pytest

from flasync.engine.tasks import (
    bind_callback,
    bind_coroutine,
    bind_sync,
    ensure_callable,
    is_coroutine_method,
    optional_error,
)
from flasync import FlasyncError, TaskSignatureError


def test_ensure_callable_names_the_role():
    with pytest.raises(TaskSignatureError, match="Task must be callable, got int"):
        ensure_callable(3, "Task")


def test_signature_error_is_a_type_error():
    assert issubclass(TaskSignatureError, TypeError)
    assert issubclass(TaskSignatureError, FlasyncError)


def test_optional_error_normalizes_falsy_values():
    err = ValueError("x")

    assert optional_error(None) is None
    assert optional_error(False) is None
    assert optional_error(err) is err


def test_bind_sync_completes_inline():
    calls, completions = [], []
    task = bind_sync(lambda a, b=0: calls.append((a, b)), (1,), {"b": 2})

    task(lambda error=None: completions.append(error))

    assert calls == [(1, 2)]
    assert completions == [None]


def test_bind_callback_appends_done_after_positional_args():
    seen = []

    def method(a, b, done, flag=False):
        seen.append((a, b, flag))
        done()

    completions = []
    bind_callback(method, ("a", "b"), {"flag": True})(lambda error=None: completions.append(error))

    assert seen == [("a", "b", True)]
    assert completions == [None]


def test_is_coroutine_method():
    async def coro():
        pass

    assert is_coroutine_method(coro)
    assert not is_coroutine_method(lambda: None)


@pytest.mark.asyncio
async def test_bind_coroutine_reports_result_and_error():
    async def ok(value):
        await asyncio.sleep(0)
        return value

    async def bad():
        raise ValueError("bad")

    results = []
    finished = asyncio.Event()

    def done(error=None):
        results.append(error)
        if len(results) == 2:
            finished.set()

    bind_coroutine(ok, (1,), {})(done)
    bind_coroutine(bad, (), {})(done)

    await asyncio.wait_for(finished.wait(), timeout=1)
    assert None in results
    assert any(isinstance(r, ValueError) for r in results)
