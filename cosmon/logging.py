from __future__ import annotations

import json
import sys
import time
from typing import Optional, TextIO


class JsonLogger:
    """Minimal structured logger.

    Emits one line per event (key transitions, watchdog timeouts, shutdown,
    network indicator changes) so logs are easy to grep and machine-parse."""
    def __init__(self, enable_json: bool, stream: Optional[TextIO] = None, verbose: bool = False):
        """Create a logger.

        Args:
            enable_json: Emit single-line JSON instead of ``key=value`` text.
            stream: File-like object for event output (defaults to stdout).
            verbose: Also emit events passed to :meth:`debug`.
        """
        self.enable_json = enable_json
        self.verbose = bool(verbose)
        self._stream = stream

    def emit(self, event: str, **fields):
        """Emit an event with a name and optional key/value fields."""
        out = self._stream if self._stream is not None else sys.stdout
        t = time.time()
        # ts: float seconds since epoch. ts_iso is local time with milliseconds.
        ts_iso = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(t)) + f'.{int((t - int(t))*1000):03d}'
        if self.enable_json:
            payload = {"ts": t, "ts_iso": ts_iso, "event": event, **fields}
            print(json.dumps(payload, sort_keys=True), file=out, flush=True)
        else:
            msg = f"[{ts_iso}] {event}"
            if fields:
                msg += " " + " ".join(f"{k}={v}" for k, v in fields.items())
            print(msg, file=out, flush=True)

    def debug(self, event: str, **fields):
        """Emit only when verbose logging is enabled."""
        if self.verbose:
            self.emit(event, **fields)
