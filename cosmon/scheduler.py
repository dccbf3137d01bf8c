from __future__ import annotations

from typing import Optional

from .config import Config
from .constants import NETWORK_LEVEL_CONNECTED, NETWORK_LEVEL_DISCONNECTED, SHUTDOWN_GRACE_MS
from .network import AddressProbe, NetworkIndicator
from .shutdown import ShutdownDebouncer
from .state import Intent, RunState
from .util import now_s, sleep_ms
from .watchdog import CosWatchdog


class Scheduler:
    """Fixed-period polling loop for the COS monitor.

    Each tick samples the COS and shutdown pins, feeds the watchdog, the shutdown
    debouncer and the network indicator, carries out whatever they ask for, and
    then sleeps for ``loop_delay_ms``.

    Commands run synchronously on this thread, so a tick that keys or unkeys
    takes longer than ``loop_delay_ms``. The loop cadence is approximate.

    The shutdown sequence is terminal: it powers the machine off and moves the
    scheduler to ``RunState.TERMINATED``; there is no way back to ``RUNNING``.
    """
    def __init__(
        self,
        config: Config,
        pins,
        gateway,
        logger,
        probe=None,
        notifier=None,
    ):
        """
        Args:
            config: Resolved configuration.
            pins: Object with ``read_cos()``, ``shutdown_pressed()`` and
                ``write_network(level)`` (see :class:`cosmon.gpio.GpioPins`).
            gateway: :class:`cosmon.commands.CommandGateway` or a compatible fake.
            logger: Anything with ``emit(event, **fields)`` and ``debug(...)``.
            probe: Connectivity probe with ``current_address()``.
            notifier: Optional :class:`cosmon.notify.Notifier`.
        """
        self.config = config
        self.pins = pins
        self.gateway = gateway
        self.logger = logger
        self.notifier = notifier

        self.state = RunState.RUNNING
        self.ticks = 0
        self.watchdog: Optional[CosWatchdog] = None
        self.debouncer = ShutdownDebouncer(config.shutdown_activate_count)
        self.network = NetworkIndicator(
            probe if probe is not None else AddressProbe(),
            divisor=config.network_check_divisor,
            pin=config.network_pin,
        )

        self._breadcrumb_interval_s = float(config.breadcrumb_interval_s)
        self._next_hb_ts = now_s() + self._breadcrumb_interval_s

    def start(self):
        """Put the outputs and the radio application into a known state."""
        self.pins.write_network(NETWORK_LEVEL_DISCONNECTED)
        level = self.pins.read_cos()
        self.watchdog = CosWatchdog(
            timeout_ticks=self.config.cos_timeout_ticks,
            timeout_enabled=self.config.cos_timeout_enabled,
            initial_level=level,
            active_level=self.config.cos_active_high,
        )
        self.gateway.unkey()
        self.logger.emit("running", cos_level=int(level), timeout_ticks=self.config.cos_timeout_ticks)

    def tick(self) -> RunState:
        """Run one iteration of the loop (without the trailing sleep)."""
        if self.state is RunState.TERMINATED:
            return self.state
        if self.watchdog is None:
            raise RuntimeError("Scheduler.start() must be called before tick()")

        cos_level = self.pins.read_cos()
        pressed = self.pins.shutdown_pressed()

        self._handle_cos(self.watchdog.on_sample(cos_level))

        if self.config.shutdown_enabled:
            if self.debouncer.on_sample(pressed) is Intent.SHUTDOWN:
                self._shutdown()
                return self.state

        if self.config.network_indicator_enabled:
            level = self.network.on_tick()
            if level is not None:
                self.pins.write_network(level)
                self.logger.emit(
                    "network",
                    connected=int(level == NETWORK_LEVEL_CONNECTED),
                    address=self.network.last_address,
                    pin=self.network.pin,
                )

        self.ticks += 1
        self._maybe_breadcrumbs()
        return self.state

    def run(self) -> RunState:
        """Start, then tick and sleep until the shutdown sequence terminates the loop."""
        self.start()
        while self.state is RunState.RUNNING:
            self.tick()
            if self.state is RunState.RUNNING:
                sleep_ms(self.config.loop_delay_ms)
        return self.state

    def _handle_cos(self, intent: Optional[Intent]):
        if intent is Intent.KEY:
            self.logger.emit("cos_active")
            self.gateway.key()
        elif intent is Intent.UNKEY:
            if self.watchdog.last_fire_was_timeout:
                self.logger.emit("cos_timeout", timeout_ms=self.config.cos_timeout_ms, timeouts=self.watchdog.timeouts)
                if self.notifier is not None:
                    self.notifier.send(
                        "COS timeout",
                        f"COS stuck active for {self.config.cos_timeout_ms} ms; node unkeyed.",
                        priority=1,
                    )
            else:
                self.logger.emit("cos_inactive")
            self.gateway.unkey()

    def _shutdown(self):
        self.logger.emit("shutdown_requested", pressed_count=self.debouncer.pressed_count)
        if self.notifier is not None:
            self.notifier.send("Shutdown", "Shutdown switch held; powering off.", priority=1)
        # Indicator off acknowledges the button.
        self.pins.write_network(NETWORK_LEVEL_DISCONNECTED)
        self.gateway.shutdown()
        sleep_ms(SHUTDOWN_GRACE_MS)
        self.gateway.power_off()
        self.state = RunState.TERMINATED
        self.logger.emit("terminated")

    def _maybe_breadcrumbs(self):
        """Emit a low-volume heartbeat for debugging long-running nodes."""
        if self._breadcrumb_interval_s <= 0:
            return
        now = now_s()
        if now < self._next_hb_ts:
            return
        wd = self.watchdog
        self.logger.emit(
            "hb",
            ticks=self.ticks,
            cos_active=int(wd.active),
            ticks_remaining=wd.ticks_remaining,
            timeouts=wd.timeouts,
            pressed_count=self.debouncer.pressed_count,
            connected=int(self.network.last_asserted),
        )
        self._next_hb_ts = now + self._breadcrumb_interval_s
