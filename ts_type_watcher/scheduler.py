"""Serialize regeneration requests coming from file watcher events."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from .errors import DirectoryNotFoundError, WriteError
from .logging import get_logger
from .models import RunReport


class RegenerationScheduler:
    """Allows one run in flight and coalesces further requests into one pending run.

    ``request`` executes the run on the calling thread. A request that arrives
    while another thread is running only marks a pending run and returns; the
    running thread picks it up as soon as the current run finishes. Any number
    of requests made during one run collapse into a single follow-up run.
    """

    def __init__(self, run: Callable[[], RunReport]) -> None:
        self._run = run
        self._lock = threading.Lock()
        self._running = False
        self._pending = False
        self.logger = get_logger("scheduler")
        self.run_count = 0
        self.last_report: Optional[RunReport] = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._pending

    def request(self, reason: str = "") -> bool:
        """Ask for a regeneration.

        Returns True when this call executed the run(s) itself and False when
        the request was folded into a run already in flight.

        Raises:
            ConfigurationError: from the run; fatal for the watch loop.
        """
        with self._lock:
            if self._running:
                self._pending = True
                self.logger.debug("Run in flight; queued regeneration (%s)", reason or "request")
                return False
            self._running = True

        try:
            while True:
                self._run_once()
                with self._lock:
                    if not self._pending:
                        self._running = False
                        return True
                    self._pending = False
        except BaseException:
            with self._lock:
                self._running = False
                self._pending = False
            raise

    def _run_once(self) -> None:
        try:
            self.last_report = self._run()
        except (DirectoryNotFoundError, WriteError) as exc:
            self.logger.error("Regeneration failed: %s", exc)
        finally:
            self.run_count += 1


__all__ = ["RegenerationScheduler"]
