from __future__ import annotations

import argparse
import json
import os
import time
from argparse import RawDescriptionHelpFormatter

from .config import Config, config_path, load_config, resolved_config_dict
from .constants import NETWORK_LEVEL_CONNECTED, NETWORK_LEVEL_DISCONNECTED, USAGE_EXAMPLES, VERSION
from .gpio import GpioPins, use_lgpio_factory
from .network import AddressProbe


def run_doctor(config: Config, seconds: float = 0.0, pins=None, probe=None, out=print):
    """Print live pin levels and connectivity. Never keys, unkeys or shuts down.

    The network indicator is driven from the probe result so the LED wiring can
    be checked too. ``seconds <= 0`` runs until Ctrl+C.
    """
    out("Doctor Mode (safe):")
    out("  - No key/unkey commands are sent.")
    out("  - The shutdown switch is only reported, never acted on.")
    out("  Ctrl+C to exit.")
    out("")

    if os.path.exists(config.control_file):
        out(f"  OK: control file present ({config.control_file})")
    else:
        out(f"  WARN: control file missing ({config.control_file}); the daemon would refuse to start")

    if config.cos_timeout_enabled:
        out(f"  COS timeout: {config.cos_timeout_ms} ms = {config.cos_timeout_ticks} ticks of {config.loop_delay_ms} ms")
    else:
        out("  COS timeout: disabled")
    out("")

    probe = probe if probe is not None else AddressProbe()
    own_pins = pins is None
    if own_pins:
        use_lgpio_factory()
        pins = GpioPins.from_config(config)

    last_cos = None
    last_pressed = None
    last_addr = None
    t0 = time.monotonic()
    try:
        while seconds <= 0 or time.monotonic() - t0 < seconds:
            cos = pins.read_cos()
            pressed = pins.shutdown_pressed()
            addr = probe.current_address()
            if cos != last_cos:
                active = cos == config.cos_active_high
                out(f"  COS gpio={config.cos_pin} level={int(cos)} active={active}")
                last_cos = cos
            if pressed != last_pressed:
                out(f"  SHUTDOWN gpio={config.shutdown_pin} pressed={pressed}")
                last_pressed = pressed
            if addr != last_addr:
                out(f"  NETWORK address={addr or '-'} connected={bool(addr)}")
                pins.write_network(NETWORK_LEVEL_CONNECTED if addr else NETWORK_LEVEL_DISCONNECTED)
                last_addr = addr
            time.sleep(0.1)
    except KeyboardInterrupt:
        pass
    finally:
        if own_pins:
            pins.close()


def build_arg_parser():
    """Construct the argument parser for the diagnostics tool."""
    ap = argparse.ArgumentParser(
        description="Check the COS monitor's wiring and configuration",
        epilog=USAGE_EXAMPLES,
        formatter_class=RawDescriptionHelpFormatter,
    )
    ap.add_argument("--config", help=f"Path to the TOML config file (default: $COSMON_CONFIG or {config_path()}).")
    ap.add_argument("--print-config", action="store_true", help="Print the resolved configuration and exit.")
    ap.add_argument("--seconds", type=float, default=0.0,
                    help="Stop after this many seconds (default: run until Ctrl+C).")
    ap.add_argument("--version", action="store_true", help="Print version and exit.")
    return ap


def main(argv=None):
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    if args.version:
        print(VERSION)
        return 0

    problems = []
    config = load_config(args.config, on_fallback=lambda *a: problems.append(a))
    for section, key, value, default in problems:
        print(f"WARNING: [{section}] {key}={value!r} is invalid; using {default!r}")

    if args.print_config:
        print(json.dumps(resolved_config_dict(config), indent=2, sort_keys=True))
        return 0

    run_doctor(config, seconds=args.seconds)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
