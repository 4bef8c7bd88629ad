"""
Chain Configuration Management

Runtime knobs for the chain engine, read from the environment (optionally
seeded from a ``.env`` file). Every knob only affects diagnostics: ordering
and error semantics never depend on configuration.
"""

import os
from typing import Optional

import dotenv
from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ChainSettings(BaseModel):
    """Diagnostics configuration shared by chains."""
    log_level: str = Field(default="WARNING", description="Minimum level for the flasync log sink")
    trace_tasks: bool = Field(default=False, description="Emit DEBUG records for every task transition")
    log_swallowed_errors: bool = Field(
        default=True,
        description="Log asynchronous faults that are dropped because no error handler is registered",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value}")
        return level


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_settings(env_file: Optional[str] = None) -> ChainSettings:
    """
    Build settings from environment variables.

    Environment Variables:
        - FLASYNC_LOG_LEVEL: loguru level name (default WARNING)
        - FLASYNC_TRACE_TASKS: trace task transitions (default false)
        - FLASYNC_LOG_SWALLOWED_ERRORS: log dropped async faults (default true)

    Args:
        env_file: Optional path to a .env file. Values already present in the
            environment win over the file.

    Returns:
        ChainSettings: Validated settings.

    Raises:
        pydantic.ValidationError: If FLASYNC_LOG_LEVEL is not a loguru level.
    """
    dotenv.load_dotenv(env_file or dotenv.find_dotenv(usecwd=True))
    return ChainSettings(
        log_level=os.getenv("FLASYNC_LOG_LEVEL", "WARNING"),
        trace_tasks=_env_bool("FLASYNC_TRACE_TASKS", False),
        log_swallowed_errors=_env_bool("FLASYNC_LOG_SWALLOWED_ERRORS", True),
    )
