"""Recurring tick timer backed by a dedicated worker thread."""

from __future__ import annotations

import threading
from collections.abc import Callable

from loguru import logger


class TickTimer:
    """Calls ``action`` every ``interval`` seconds until stopped.

    The first call happens one interval after ``start``. ``stop`` wakes the
    worker and joins it, so a tick already in progress finishes before
    ``stop`` returns. Called from inside ``action`` (e.g. by a subscriber
    that unsubscribes itself), ``stop`` only signals the worker.
    """

    def __init__(self, action: Callable[[], None], interval: float, name: str = "tick") -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.action = action
        self.interval = interval
        self.name = name
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> bool:
        """Start the worker. Returns False if it was already running."""
        with self._lock:
            if self.is_running:
                return False
            # A worker that was told to stop exits on its own after its
            # current action; it keeps its own (already set) event.
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name=f"marketsim-{self.name}",
                daemon=True,
            )
            self._thread.start()
        logger.info(f"[{self.name}] timer started ({self.interval}s interval)")
        return True

    def stop(
        self, timeout: float | None = None, wait: bool = True
    ) -> threading.Thread | None:
        """Signal the worker to exit and, with ``wait``, join it.

        Returns the signalled worker so a caller passing ``wait=False`` can
        join it later; None when nothing was running or when called from the
        worker itself.
        """
        with self._lock:
            thread = self._thread
            if thread is None:
                return None
            self._stop_event.set()
            if threading.current_thread() is thread:
                return None
            self._thread = None
        if wait:
            thread.join(timeout)
        logger.info(f"[{self.name}] timer stopped")
        return thread

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            try:
                self.action()
            except Exception:
                logger.exception(f"[{self.name}] tick failed")
