from __future__ import annotations

import socket
from typing import Optional

from .constants import NETWORK_LEVEL_CONNECTED, NETWORK_LEVEL_DISCONNECTED

# Any routable address works; connect() on a UDP socket sends nothing.
PROBE_TARGET = ("8.8.8.8", 80)


class AddressProbe:
    """Connectivity probe: the local IPv4 address used for the default route."""
    def __init__(self, target=PROBE_TARGET):
        self.target = target

    def current_address(self) -> str:
        """Return the local address, or ``""`` when there is no usable route."""
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            s.connect(self.target)
            addr = s.getsockname()[0]
        except OSError:
            return ""
        finally:
            s.close()
        if not addr or addr == "0.0.0.0":
            return ""
        return addr


class NetworkIndicator:
    """Tracks network presence for the status LED.

    Checks run every ``divisor`` ticks (the first tick included). A level is only
    returned when presence changed since the last write, so the pin is never
    rewritten with the value it already has. The LED is off (pin HIGH) while
    disconnected and lit (pin LOW) while connected."""
    def __init__(self, probe, divisor: int, pin: int):
        self.probe = probe
        self.divisor = max(1, int(divisor))
        self.pin = pin
        self.last_asserted = False
        self.tick_counter = 0
        self.last_address = ""

    def on_tick(self) -> Optional[bool]:
        """Return the level to write to the indicator pin, or ``None`` for no write."""
        due = self.tick_counter % self.divisor == 0
        self.tick_counter += 1
        if not due:
            return None

        self.last_address = self.probe.current_address()
        connected = self.last_address != ""
        if connected == self.last_asserted:
            return None
        self.last_asserted = connected
        return NETWORK_LEVEL_CONNECTED if connected else NETWORK_LEVEL_DISCONNECTED
