from __future__ import annotations

from typing import Optional

from .state import Intent


class ShutdownDebouncer:
    """Counts consecutive "pressed" samples of the shutdown button.

    The button must be held for more than ``activate_count`` ticks. A single
    released sample starts the count over."""
    def __init__(self, activate_count: int):
        self.activate_count = int(activate_count)
        self.pressed_count = 0
        self.fired = False

    def on_sample(self, pressed: bool) -> Optional[Intent]:
        if not pressed:
            self.pressed_count = 0
            return None
        self.pressed_count += 1
        if self.pressed_count > self.activate_count and not self.fired:
            self.fired = True
            return Intent.SHUTDOWN
        return None
