"""
Timer backends and a cancellable periodic task.

A backend only needs call_later(delay, callback) -> handle and cancel(handle).
TkTimers runs callbacks on the tkinter event loop; ThreadTimers uses
threading.Timer for console mode.
"""

import threading
import logging
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)


class TkTimers:
    """Schedules callbacks with a tkinter widget's after()."""

    def __init__(self, widget):
        self._widget = widget

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        ms = max(1, int(round(delay * 1000)))
        return self._widget.after(ms, callback)

    def cancel(self, handle: Any):
        self._widget.after_cancel(handle)


class ThreadTimers:
    """Schedules callbacks on daemon threading.Timer threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer):
        handle.cancel()


class PeriodicTask:
    """
    Calls a function every `interval` seconds until cancelled.

    The first call happens one interval after start(), never immediately.
    cancel() waits for a call that is already running, and no call starts
    after cancel() returns.
    """

    def __init__(self, timers, interval: float, callback: Callable[[], None]):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._timers = timers
        self._interval = interval
        self._callback = callback
        self._handle: Optional[Any] = None
        self._cancelled = False
        self._started = False
        self._lock = threading.RLock()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def active(self) -> bool:
        return self._started and not self._cancelled

    def start(self) -> 'PeriodicTask':
        with self._lock:
            if self._started:
                raise RuntimeError("PeriodicTask already started")
            self._started = True
            self._schedule()
        return self

    def _schedule(self):
        self._handle = self._timers.call_later(self._interval, self._fire)

    def _fire(self):
        with self._lock:
            if self._cancelled:
                return
            self._handle = None
            try:
                self._callback()
            except Exception:
                log.exception("Periodic task callback failed")
            # The callback may have cancelled us
            if not self._cancelled:
                self._schedule()

    def cancel(self):
        """Stop the task. Safe to call more than once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            handle, self._handle = self._handle, None
            if handle is not None:
                self._timers.cancel(handle)
