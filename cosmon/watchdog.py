from __future__ import annotations

from typing import Optional

from .state import Intent


class CosWatchdog:
    """COS edge detector with a stuck-carrier timeout.

    Key/unkey intents are only emitted on edges, so the radio application is not
    sent the same command every tick. While the carrier is active a countdown
    runs; if it reaches zero without a falling edge the carrier is presumed
    stuck and a single unkey is emitted.

    ``ticks_remaining`` is ``None`` while disarmed and ``n > 0`` while counting
    down. The unkey fires on the sample that brings it to ``0``; a zero-length
    timeout arms at ``0`` and fires on the next sample.
    """
    def __init__(
        self,
        timeout_ticks: int,
        timeout_enabled: bool,
        initial_level: bool,
        active_level: bool = True,
    ):
        """
        Args:
            timeout_ticks: Countdown length armed on each rising edge.
            timeout_enabled: When False the countdown is never armed.
            initial_level: First real sample of the COS pin. Seeding from it means
                process start is never mistaken for an edge.
            active_level: Pin level that means "carrier present".
        """
        self.timeout_ticks = int(timeout_ticks)
        self.timeout_enabled = bool(timeout_enabled)
        self.active_level = bool(active_level)
        self.last_level = bool(initial_level)
        self.ticks_remaining: Optional[int] = None
        self.timeouts = 0
        self.last_fire_was_timeout = False

    @property
    def active(self) -> bool:
        return self.last_level == self.active_level

    @property
    def armed(self) -> bool:
        return self.ticks_remaining is not None

    def on_sample(self, level: bool) -> Optional[Intent]:
        """Consume one sample of the COS pin; return the intent it produces, if any."""
        level = bool(level)
        self.last_fire_was_timeout = False

        if level != self.last_level:
            self.last_level = level
            if level == self.active_level:
                if self.timeout_enabled:
                    self.ticks_remaining = self.timeout_ticks
                return Intent.KEY
            self.ticks_remaining = None
            return Intent.UNKEY

        if not self.timeout_enabled or self.ticks_remaining is None:
            return None

        if self.ticks_remaining > 0 and level == self.active_level:
            self.ticks_remaining -= 1
        if self.ticks_remaining > 0:
            return None

        # Countdown reached zero: unkey once and disarm until the next rising edge.
        self.ticks_remaining = None
        self.timeouts += 1
        self.last_fire_was_timeout = True
        return Intent.UNKEY
