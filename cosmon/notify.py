from __future__ import annotations
import threading
from typing import Optional
import requests

PUSHOVER_URL = "https://api.pushover.net/1/messages.json"


class Notifier:
    """Optional Pushover alerts for events nobody is watching the log for
    (stuck carrier, shutdown button)."""
    def __init__(self, enabled: bool, pushover_token: Optional[str], pushover_user: Optional[str],
                 logger=None, timeout_s: float = 5.0):
        self.enabled = enabled and bool(pushover_token and pushover_user)
        self._token = pushover_token
        self._user = pushover_user
        self._timeout = timeout_s
        self.logger = logger

    def send(self, title: str, message: str, priority: int = 0):
        if not self.enabled:
            return
        # Posted off the polling thread so a slow network never stretches a tick.
        threading.Thread(target=self._send_sync, args=(title, message, priority), daemon=True).start()

    def _send_sync(self, title: str, message: str, priority: int):
        try:
            resp = requests.post(
                PUSHOVER_URL,
                data={
                    "token": self._token,
                    "user": self._user,
                    "title": title,
                    "message": message,
                    "priority": priority,
                },
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            if self.logger is not None:
                self.logger.emit("notify_failed", title=title, error=str(e))
