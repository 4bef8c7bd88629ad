"""
Shared fixtures: a small fluent API built on flasync.

``write_sync`` appends immediately when it can, ``write`` completes on the
next event loop iteration, ``fetch`` is a coroutine method and ``fail``
reports an asynchronous fault through its done callback.
"""

import asyncio

import pytest

from flasync import flasync


class Api:
    def __init__(self, output=None, settings=None):
        self.output = output if output is not None else []
        flasync(self, settings)
        # It has one synchronous method
        self.write_sync = self.asyncify(self._write_sync)
        # And asynchronous ones
        self.write = self.async_(self._write)
        self.fetch = self.async_(self._fetch)
        self.fail = self.async_(self._fail)

    def _write_sync(self, *parts):
        self.output.append(":".join(parts))
        return self

    def _write(self, *parts_and_done):
        *parts, done = parts_and_done

        def _later():
            self._write_sync(*parts)
            done()

        asyncio.get_running_loop().call_soon(_later)
        return self

    async def _fetch(self, text, delay=0):
        await asyncio.sleep(delay)
        self._write_sync(text)

    def _fail(self, error, done):
        asyncio.get_running_loop().call_soon(done, error)
        return self


@pytest.fixture
def api():
    return Api()


@pytest.fixture
def make_api():
    return Api
