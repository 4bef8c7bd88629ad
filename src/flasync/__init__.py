"""
Fluent asynchronous API helper.

Lets an object expose a chainable API mixing synchronous and asynchronous
methods while the effects of the calls happen in the order they were made.
"""

from loguru import logger

from .engine import (
    Chain,
    ChainAttachError,
    Done,
    ErrorHandler,
    FlasyncError,
    Task,
    TaskSignatureError,
)
from .logs import configure_logging, disable_logging
from .mixin import chained, chained_async, flasync, get_chain
from .schemas import ChainSnapshot, ChainStatus
from .settings import ChainSettings, load_settings

logger.disable("flasync")

__all__ = [
    "Chain",
    "ChainAttachError",
    "ChainSettings",
    "ChainSnapshot",
    "ChainStatus",
    "Done",
    "ErrorHandler",
    "FlasyncError",
    "Task",
    "TaskSignatureError",
    "chained",
    "chained_async",
    "configure_logging",
    "disable_logging",
    "flasync",
    "get_chain",
    "load_settings",
]
