from __future__ import annotations

import time


def now_s() -> float:
    """Monotonic clock in seconds."""
    return time.monotonic()


def sleep_ms(ms: float) -> None:
    """Block the calling thread for ``ms`` milliseconds."""
    if ms > 0:
        time.sleep(ms / 1000.0)
