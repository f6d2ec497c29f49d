"""pqclient.policy.update_gate

One-shot gate for the primusquery index refresh (`<host> -update`).

The refresh should run at most once per process before the first fetch.
Share one UpdateGate between all PrimusQueryTool instances of a process;
the lock makes the check-and-refresh single-flight, so concurrent first
callers wait for the running refresh instead of issuing their own.
"""

from __future__ import annotations
import threading
from typing import Callable


class UpdateGate:
    """Process-lifetime 'index already refreshed' flag."""

    def __init__(self, updated: bool = False):
        self._updated = updated
        self._lock = threading.Lock()

    @property
    def updated(self) -> bool:
        return self._updated

    def run_once(self, refresh: Callable[[], object]) -> bool:
        """Call refresh() unless it already succeeded; return True if it ran.

        The flag flips only when refresh() returns. An exception leaves the
        gate open, so the next caller retries.
        """
        if self._updated:
            return False
        with self._lock:
            if self._updated:
                return False
            refresh()
            self._updated = True
            return True

    def mark_updated(self) -> None:
        with self._lock:
            self._updated = True

    def reset(self) -> None:
        with self._lock:
            self._updated = False
