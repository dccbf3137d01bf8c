"""cosmon package for cos-monitor."""

from .config import Config
from .scheduler import Scheduler
from .state import Intent, RunState
from .watchdog import CosWatchdog

__all__ = ["Config", "CosWatchdog", "Intent", "RunState", "Scheduler"]
