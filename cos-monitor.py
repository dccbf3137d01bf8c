#!/usr/bin/env python3
#
# COS monitor for AllStar nodes
#
# Watches a radio's Carrier-Operated Switch on a Raspberry Pi GPIO pin and keys
# or unkeys the Asterisk node whenever the carrier changes. A carrier that stays
# active for longer than COS_timeout_ms is presumed stuck and the node is
# unkeyed once.
#
# Optional extras: a network status LED and a hold-to-shutdown switch.
#
# The daemon takes no arguments. Configuration is read from /etc/cosmon.toml
# (or $COSMON_CONFIG).
#

from __future__ import annotations

from cosmon.cli import check_control_file, main
from cosmon.commands import CommandGateway, ShellRunner
from cosmon.config import Config, config_from_dict, load_config, resolved_config_dict
from cosmon.constants import VERSION
from cosmon.network import AddressProbe, NetworkIndicator
from cosmon.scheduler import Scheduler
from cosmon.shutdown import ShutdownDebouncer
from cosmon.state import Intent, RunState
from cosmon.watchdog import CosWatchdog
from cosmon import scheduler


if __name__ == "__main__":
    raise SystemExit(main())
