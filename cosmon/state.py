from __future__ import annotations

from enum import Enum


class Intent(Enum):
    """Action requested by one of the state owners for the scheduler to carry out."""
    KEY = "key"
    UNKEY = "unkey"
    SHUTDOWN = "shutdown"


class RunState(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"
