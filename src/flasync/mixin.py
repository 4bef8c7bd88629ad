"""
Attach a chain to an arbitrary host object.

Two styles are supported, both by composition:

Instance style, binding the chain's operations onto the host::

    class Api:
        def __init__(self):
            self.output = []
            flasync(self)
            self.write_sync = self.asyncify(self._write_sync)
            self.write = self.async_(self._write)

Class style, decorating methods in the class body::

    class Api:
        def __init__(self):
            self.output = []
            flasync(self)

        @chained
        def write_sync(self, text):
            self.output.append(text)
            return self

Decorated methods keep the undecorated function on ``__wrapped__``; code
inside the host should call that form to avoid rescheduling its own work.
"""

import functools
import types
from typing import Any, Callable, Optional, TypeVar

from .engine.chain import Chain
from .engine.exceptions import ChainAttachError
from .engine.tasks import ensure_callable
from .settings import ChainSettings

H = TypeVar("H")

CHAIN_ATTRIBUTE = "__flasync_chain__"

# Operations bound onto the host by flasync().
_DELEGATED = ("then", "finally_", "asyncify", "async_", "on_error", "wait")


def flasync(host: H, settings: Optional[ChainSettings] = None) -> H:
    """
    Give host its own chain and expose the chain operations on it.

    Args:
        host: Any object accepting new attributes.
        settings: Settings for the new chain.

    Returns:
        The same host.

    Raises:
        ChainAttachError: If host already has a chain or refuses attributes.
    """
    if getattr(host, CHAIN_ATTRIBUTE, None) is not None:
        raise ChainAttachError(f"{type(host).__name__} already has a chain attached")
    chain = Chain(host, settings)
    try:
        setattr(host, CHAIN_ATTRIBUTE, chain)
        for name in _DELEGATED:
            setattr(host, name, getattr(chain, name))
    except AttributeError as exc:
        raise ChainAttachError(f"Cannot attach a chain to {type(host).__name__}: {exc}") from exc
    return host


def get_chain(host: Any) -> Chain:
    """
    Return the chain attached to host.

    Raises:
        ChainAttachError: If flasync() was never applied to host.
    """
    chain = getattr(host, CHAIN_ATTRIBUTE, None)
    if chain is None:
        raise ChainAttachError(f"{type(host).__name__} has no chain; call flasync() first")
    return chain


def chained(method: Callable[..., Any]) -> Callable[..., Any]:
    """Class-body form of Chain.asyncify()."""
    ensure_callable(method, "Synchronous method")

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        return get_chain(self).asyncify(types.MethodType(method, self))(*args, **kwargs)

    return wrapper


def chained_async(method: Callable[..., Any]) -> Callable[..., Any]:
    """Class-body form of Chain.async_(); accepts done-callback and ``async def`` methods."""
    ensure_callable(method, "Asynchronous method")

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        return get_chain(self).async_(types.MethodType(method, self))(*args, **kwargs)

    return wrapper
