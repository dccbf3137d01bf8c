from __future__ import annotations

import os
import sys

from gpiozero import GPIOZeroError

from .commands import CommandGateway
from .config import config_path, get_notifier_config, load_config
from .constants import VERSION
from .gpio import GpioPins, use_lgpio_factory
from .logging import JsonLogger
from .notify import Notifier
from .scheduler import Scheduler


def check_control_file(path: str) -> bool:
    """The radio application's control socket must exist before we key anything."""
    return os.path.exists(path)


def main():
    """Daemon entry point. Takes no arguments; everything comes from the config file."""
    path = config_path()
    fallbacks = []
    config = load_config(path, on_fallback=lambda *a: fallbacks.append(a))
    logger = JsonLogger(enable_json=config.json, verbose=config.verbose)
    for section, key, value, default in fallbacks:
        logger.emit("config_fallback", section=section, key=key, value=value, default=default)

    if not check_control_file(config.control_file):
        print("\nAsterisk needs to be running first!  Exiting\n", file=sys.stderr)
        return 1

    print(f"cosmon {VERSION}")
    logger.emit(
        "startup",
        version=VERSION,
        config=path,
        cos_gpio=config.cos_pin,
        cos_active_high=config.cos_active_high,
        cos_timeout_ms=(config.cos_timeout_ms if config.cos_timeout_enabled else None),
        loop_delay_ms=config.loop_delay_ms,
        shutdown_switch=config.shutdown_enabled,
        shutdown_gpio=config.shutdown_pin,
        network_indicator=config.network_indicator_enabled,
        network_gpio=config.network_pin,
        network_check_divisor=config.network_check_divisor,
    )

    try:
        use_lgpio_factory()
        pins = GpioPins.from_config(config)
    except (GPIOZeroError, ImportError, OSError) as e:
        logger.emit("gpio_setup_failed", error=str(e))
        return 2

    gateway = CommandGateway(config, logger)
    notifier = Notifier(**get_notifier_config(), logger=logger)
    sched = Scheduler(config, pins, gateway, logger, notifier=notifier)
    try:
        sched.run()
    finally:
        pins.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
