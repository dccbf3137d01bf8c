from __future__ import annotations

from gpiozero import Device, DigitalInputDevice, DigitalOutputDevice


def use_lgpio_factory():
    """Force the lgpio backend (Pi 5 / Debian Trixie+).

    Called by the daemon at startup rather than at import, so the package can be
    imported (and tested with gpiozero's MockFactory) on machines without lgpio.
    """
    from gpiozero.pins.lgpio import LGPIOFactory
    Device.pin_factory = LGPIOFactory()


class GpioPins:
    """The three pins the monitor uses (BCM numbering).

    - COS input: no pull, read as the raw electrical level.
    - Shutdown input: pull-up, button shorts to GND, so "pressed" is LOW.
    - Network indicator output: written as a raw level.
    """
    def __init__(self, cos_pin: int, shutdown_pin: int, network_pin: int):
        self.cos = DigitalInputDevice(cos_pin, pull_up=None, active_state=True)
        self.shutdown = DigitalInputDevice(shutdown_pin, pull_up=True)
        self.network = DigitalOutputDevice(network_pin, initial_value=None)

    @classmethod
    def from_config(cls, config) -> "GpioPins":
        return cls(config.cos_pin, config.shutdown_pin, config.network_pin)

    def read_cos(self) -> bool:
        """Raw COS level: True = HIGH."""
        return bool(self.cos.value)

    def shutdown_pressed(self) -> bool:
        return bool(self.shutdown.is_active)

    def write_network(self, level: bool):
        if level:
            self.network.on()
        else:
            self.network.off()

    def close(self):
        for dev in (self.cos, self.shutdown, self.network):
            dev.close()
