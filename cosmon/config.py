from __future__ import annotations

import os
from dataclasses import dataclass, asdict
from typing import Callable, Optional

try:
    import tomllib  # py3.11+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib

from .constants import (
    CONFIG_ENV,
    CONFIG_PATH,
    CONTROL_FILE,
    DEFAULT_COS_GPIO,
    DEFAULT_COS_TIMEOUT_MS,
    DEFAULT_LOOP_DELAY_MS,
    DEFAULT_NET_CHECK_DIVISOR,
    DEFAULT_NETWORK_GPIO,
    DEFAULT_SD_ACTIVATE_COUNT,
    DEFAULT_SHUTDOWN_GPIO,
    KEY_CMD,
    POWEROFF_CMD,
    SHUTDOWN_SCRIPT,
    UNKEY_CMD,
)

FallbackHook = Callable[[str, str, object, object], None]

_TRUE_WORDS = ("1", "true", "yes", "on", "y", "t")
_FALSE_WORDS = ("0", "false", "no", "off", "n", "f")


@dataclass(frozen=True)
class Config:
    """Resolved parameters for one run of the daemon."""
    cos_pin: int = DEFAULT_COS_GPIO
    network_pin: int = DEFAULT_NETWORK_GPIO
    shutdown_pin: int = DEFAULT_SHUTDOWN_GPIO
    cos_active_high: bool = True

    network_indicator_enabled: bool = False
    shutdown_enabled: bool = False

    loop_delay_ms: int = DEFAULT_LOOP_DELAY_MS
    cos_timeout_ms: int = DEFAULT_COS_TIMEOUT_MS
    cos_timeout_enabled: bool = True
    network_check_divisor: int = DEFAULT_NET_CHECK_DIVISOR
    shutdown_activate_count: int = DEFAULT_SD_ACTIVATE_COUNT

    key_command: str = KEY_CMD
    unkey_command: str = UNKEY_CMD
    shutdown_script: str = SHUTDOWN_SCRIPT
    poweroff_command: str = POWEROFF_CMD
    control_file: str = CONTROL_FILE

    json: bool = False
    verbose: bool = False
    breadcrumb_interval_s: float = 0.0

    @property
    def cos_timeout_ticks(self) -> int:
        """Watchdog length in loop ticks, rounded half up."""
        return int(self.cos_timeout_ms / self.loop_delay_ms + 0.5)


def get_bool_env(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    val = val.lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


def get_notifier_config():
    return {
        "enabled": get_bool_env("COSMON_NOTIFY", False),
        "pushover_token": os.getenv("PUSHOVER_TOKEN"),
        "pushover_user": os.getenv("PUSHOVER_USER"),
    }


def config_path() -> str:
    """Path of the config file: ``$COSMON_CONFIG`` or the fixed default."""
    return os.environ.get(CONFIG_ENV) or CONFIG_PATH


def load_toml_config(path: str) -> dict:
    """Load TOML configuration from path."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _get_cfg(cfg: dict, section: str, key: str, default=None):
    sec = cfg.get(section, {})
    if not isinstance(sec, dict):
        return default
    return sec.get(key, default)


class _Resolver:
    """Reads typed values out of a parsed TOML dict, falling back to defaults."""

    def __init__(self, cfg: dict, on_fallback: Optional[FallbackHook]):
        self.cfg = cfg if isinstance(cfg, dict) else {}
        self.on_fallback = on_fallback

    def _fallback(self, section, key, value, default):
        if self.on_fallback is not None:
            self.on_fallback(section, key, value, default)
        return default

    def get_int(self, section: str, key: str, default: int, minimum: int = 0) -> int:
        raw = _get_cfg(self.cfg, section, key, None)
        if raw is None:
            return default
        # bool is an int subclass; `true` is never a valid pin or count.
        if isinstance(raw, bool):
            return self._fallback(section, key, raw, default)
        try:
            val = int(raw)
        except (TypeError, ValueError):
            return self._fallback(section, key, raw, default)
        if val < minimum:
            return self._fallback(section, key, raw, default)
        return val

    def get_float(self, section: str, key: str, default: float) -> float:
        raw = _get_cfg(self.cfg, section, key, None)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return self._fallback(section, key, raw, default)
        try:
            val = float(raw)
        except (TypeError, ValueError):
            return self._fallback(section, key, raw, default)
        if val < 0:
            return self._fallback(section, key, raw, default)
        return val

    def get_bool(self, section: str, key: str, default: bool) -> bool:
        raw = _get_cfg(self.cfg, section, key, None)
        if raw is None:
            return default
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, int) and raw in (0, 1):
            return bool(raw)
        if isinstance(raw, str):
            low = raw.strip().lower()
            if low in _TRUE_WORDS:
                return True
            if low in _FALSE_WORDS:
                return False
        return self._fallback(section, key, raw, default)

    def get_str(self, section: str, key: str, default: str) -> str:
        raw = _get_cfg(self.cfg, section, key, None)
        if raw is None:
            return default
        if not isinstance(raw, str) or not raw.strip():
            return self._fallback(section, key, raw, default)
        return raw.strip()


def config_from_dict(cfg: dict, on_fallback: Optional[FallbackHook] = None) -> Config:
    """Map a parsed TOML document onto :class:`Config`.

    Missing keys take their default silently. Present but invalid values also
    take their default, and ``on_fallback(section, key, value, default)`` is
    called so the caller can log it. Never raises for bad values.
    """
    r = _Resolver(cfg, on_fallback)
    d = Config()
    return Config(
        cos_pin=r.get_int("gpio", "gpio_COS", d.cos_pin),
        network_pin=r.get_int("gpio", "gpio_network", d.network_pin),
        shutdown_pin=r.get_int("gpio", "gpio_shutdown", d.shutdown_pin),
        cos_active_high=r.get_bool("gpio", "COS_active_high", d.cos_active_high),
        network_indicator_enabled=r.get_bool("functions", "enable_network_status_LED", d.network_indicator_enabled),
        shutdown_enabled=r.get_bool("functions", "enable_shutdown_switch", d.shutdown_enabled),
        loop_delay_ms=r.get_int("COS settings", "COS_poll_loop_interval_ms", d.loop_delay_ms, minimum=1),
        cos_timeout_ms=r.get_int("COS settings", "COS_timeout_ms", d.cos_timeout_ms),
        cos_timeout_enabled=r.get_bool("COS settings", "COS_timeout_enable", d.cos_timeout_enabled),
        network_check_divisor=r.get_int("COS settings", "network_check_divisor", d.network_check_divisor, minimum=1),
        shutdown_activate_count=r.get_int("COS settings", "shutdown_switch_activate_count", d.shutdown_activate_count),
        key_command=r.get_str("commands", "key", d.key_command),
        unkey_command=r.get_str("commands", "unkey", d.unkey_command),
        shutdown_script=r.get_str("commands", "shutdown_script", d.shutdown_script),
        poweroff_command=r.get_str("commands", "poweroff", d.poweroff_command),
        control_file=r.get_str("commands", "control_file", d.control_file),
        json=r.get_bool("logging", "json", d.json),
        verbose=r.get_bool("logging", "verbose", d.verbose),
        breadcrumb_interval_s=r.get_float("logging", "breadcrumb_interval", d.breadcrumb_interval_s),
    )


def load_config(path: Optional[str] = None, on_fallback: Optional[FallbackHook] = None) -> Config:
    """Load and resolve the config file.

    A missing or unparsable file yields the all-defaults config; the problem is
    reported through ``on_fallback`` with the section set to ``"file"``.
    """
    path = path or config_path()
    try:
        cfg = load_toml_config(path)
    except FileNotFoundError:
        cfg = {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        if on_fallback is not None:
            on_fallback("file", path, str(e), "defaults")
        cfg = {}
    return config_from_dict(cfg, on_fallback=on_fallback)


def resolved_config_dict(config: Config) -> dict:
    c = asdict(config)
    return {
        "gpio": {
            "gpio_COS": c["cos_pin"],
            "gpio_network": c["network_pin"],
            "gpio_shutdown": c["shutdown_pin"],
            "COS_active_high": c["cos_active_high"],
        },
        "functions": {
            "enable_network_status_LED": c["network_indicator_enabled"],
            "enable_shutdown_switch": c["shutdown_enabled"],
        },
        "COS settings": {
            "COS_poll_loop_interval_ms": c["loop_delay_ms"],
            "COS_timeout_ms": c["cos_timeout_ms"],
            "COS_timeout_enable": c["cos_timeout_enabled"],
            "network_check_divisor": c["network_check_divisor"],
            "shutdown_switch_activate_count": c["shutdown_activate_count"],
        },
        "commands": {
            "key": c["key_command"],
            "unkey": c["unkey_command"],
            "shutdown_script": c["shutdown_script"],
            "poweroff": c["poweroff_command"],
            "control_file": c["control_file"],
        },
        "logging": {
            "json": c["json"],
            "verbose": c["verbose"],
            "breadcrumb_interval": c["breadcrumb_interval_s"],
        },
    }
