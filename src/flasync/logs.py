"""
Logging setup for flasync.

The library logs through loguru and stays silent until the application opts
in with configure_logging().
"""

import sys
from typing import Any, Optional

from loguru import logger

from .settings import ChainSettings

_sink_id: Optional[int] = None


def configure_logging(settings: Optional[ChainSettings] = None, sink: Any = None) -> int:
    """
    Enable flasync log records and route them to a sink.

    Calling it again replaces the sink installed by the previous call.

    Args:
        settings: Level comes from settings.log_level (defaults apply when None).
        sink: Any loguru sink; stderr when None.

    Returns:
        int: The loguru handler id.
    """
    global _sink_id
    settings = settings or ChainSettings()
    if _sink_id is not None:
        logger.remove(_sink_id)
    logger.enable("flasync")
    _sink_id = logger.add(
        sink or sys.stderr,
        level=settings.log_level,
        filter="flasync",
        format="{time:HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}",
    )
    return _sink_id


def disable_logging() -> None:
    """Silence flasync records and drop the sink installed by configure_logging()."""
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
        _sink_id = None
    logger.disable("flasync")
