"""
Chain State Schema Models

Read-only pydantic views over a chain's internal state, used for
introspection, logging and tests. Snapshots are detached copies: mutating
the chain afterwards does not change an existing snapshot.
"""

import json
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ChainStatus(str, Enum):
    """Lifecycle state of a chain."""
    IDLE = "idle"
    DRAINING = "draining"


class ChainSnapshot(BaseModel):
    """
    Point-in-time view of a chain.

    Attributes:
        pending_count: Tasks dequeued and not yet completed.
        queued: Tasks waiting in the queue.
        has_error_handler: Whether on_error() registered a handler.
        status: IDLE when nothing is in flight, DRAINING otherwise.
    """
    model_config = ConfigDict(frozen=True)

    pending_count: int = Field(..., ge=0, description="Tasks currently in flight")
    queued: int = Field(..., ge=0, description="Tasks waiting to start")
    has_error_handler: bool = Field(default=False, description="Error handler registered")
    status: ChainStatus = Field(default=ChainStatus.IDLE, description="Chain lifecycle state")

    @property
    def idle(self) -> bool:
        return self.status is ChainStatus.IDLE and self.queued == 0

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), sort_keys=True)
