from __future__ import annotations

import subprocess

from .config import Config


class ShellRunner:
    """Runs a command line through ``/bin/sh`` and waits for it to finish.

    Output is not captured; it goes wherever the daemon's stdout/stderr go."""
    def run(self, command: str) -> int:
        return subprocess.run(command, shell=True).returncode


class CommandGateway:
    """The radio application's control plane: key, unkey, shutdown and power-off.

    Every call blocks until the command exits. Exit status is logged when
    nonzero but never retried, since the remote side gives no feedback."""
    def __init__(self, config: Config, logger, runner=None):
        self.logger = logger
        self.runner = runner if runner is not None else ShellRunner()
        self._key_cmd = config.key_command
        self._unkey_cmd = config.unkey_command
        self._shutdown_cmd = config.shutdown_script
        self._poweroff_cmd = config.poweroff_command

    def key(self) -> int:
        return self._run("key", self._key_cmd)

    def unkey(self) -> int:
        return self._run("unkey", self._unkey_cmd)

    def shutdown(self) -> int:
        """Run the shutdown script (stops the radio application)."""
        return self._run("shutdown", self._shutdown_cmd)

    def power_off(self) -> int:
        return self._run("poweroff", self._poweroff_cmd)

    def _run(self, name: str, command: str) -> int:
        try:
            status = self.runner.run(command)
        except OSError as e:
            self.logger.emit("command_failed", command=name, error=str(e))
            return -1
        if status != 0:
            self.logger.emit("command_failed", command=name, status=status)
        else:
            self.logger.debug("command", command=name)
        return status
