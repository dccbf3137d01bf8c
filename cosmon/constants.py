from __future__ import annotations

VERSION = "1.1.0"

CONFIG_PATH = "/etc/cosmon.toml"
CONFIG_ENV = "COSMON_CONFIG"

# BCM numbering. Header pins 40, 15 and 7 (wiringPi 29, 3 and 7).
DEFAULT_COS_GPIO = 21
DEFAULT_NETWORK_GPIO = 22
DEFAULT_SHUTDOWN_GPIO = 4

DEFAULT_LOOP_DELAY_MS = 100
DEFAULT_COS_TIMEOUT_MS = 150000
DEFAULT_NET_CHECK_DIVISOR = 20
DEFAULT_SD_ACTIVATE_COUNT = 30

KEY_CMD = 'asterisk -rx "susb tune menu-support K"'
UNKEY_CMD = 'asterisk -rx "susb tune menu-support k"'
SHUTDOWN_SCRIPT = "/usr/local/sbin/astdn.sh"
POWEROFF_CMD = "/usr/bin/poweroff"
CONTROL_FILE = "/var/run/asterisk.ctl"

SHUTDOWN_GRACE_MS = 5000

# Network indicator LED is wired active-low: HIGH = off.
NETWORK_LEVEL_DISCONNECTED = True
NETWORK_LEVEL_CONNECTED = False


USAGE_EXAMPLES = """\
Usage examples:
  # Watch the COS, shutdown and network pins for 30 seconds
  cosmon-doctor --seconds 30

  # Use a config file other than /etc/cosmon.toml
  cosmon-doctor --config ./cosmon.toml

  # Print the resolved configuration and exit
  cosmon-doctor --print-config
"""
