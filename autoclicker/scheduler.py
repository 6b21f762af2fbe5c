"""
Click scheduler state machine.

Idle -> Running on start() with a valid interval, Running -> Idle on stop().
While running, one left click is posted at the pointer location per tick.
"""

import math
import logging
from decimal import Decimal
from typing import Optional, Tuple

from .profiles import Profile
from .state import AppState, SchedulerState
from .timers import PeriodicTask

log = logging.getLogger(__name__)


class InvalidInterval(ValueError):
    """The interval text is not a positive number of seconds."""


def parse_interval(text: str) -> float:
    """
    Parse interval text as seconds.

    Raises:
        InvalidInterval: text is not a finite number greater than zero
    """
    try:
        seconds = float(text.strip())
    except (AttributeError, ValueError):
        raise InvalidInterval(f"not a number: {text!r}") from None

    if not math.isfinite(seconds) or seconds <= 0:
        raise InvalidInterval(f"must be a positive number of seconds: {text!r}")

    return seconds


def format_seconds(seconds: float) -> str:
    """Plain decimal text, never exponent notation."""
    if seconds.is_integer():
        return str(int(seconds))
    return format(Decimal(repr(seconds)), 'f')


class ClickScheduler:
    """
    Repeating click timer bound to an AppState.

    `clicker` needs pointer_location() -> Optional[(x, y)] and click(x, y).
    `timers` is a backend from autoclicker.timers.
    """

    def __init__(self, state: AppState, clicker, timers):
        self._state = state
        self._clicker = clicker
        self._timers = timers
        self._task: Optional[PeriodicTask] = None

    @property
    def running(self) -> bool:
        return self._state.running

    def start(self, interval_text: str, profile_name: str) -> bool:
        """
        Start clicking every interval seconds.

        Returns False and leaves the scheduler idle if the interval is invalid.
        """
        try:
            seconds = parse_interval(interval_text)
        except InvalidInterval as e:
            log.info(f"Refusing to start {profile_name!r}: {e}")
            self._state.status = f"Invalid interval for {profile_name}"
            self._state.notify()
            return False

        self._cancel_task()

        self._state.click_count = 0
        self._state.active_interval = seconds
        self._state.status = f"Clicking every {format_seconds(seconds)}s ({profile_name})..."
        self._state.transition_to(SchedulerState.RUNNING, "start")

        self._task = PeriodicTask(self._timers, seconds, self.tick).start()
        self._state.notify()
        return True

    def stop(self):
        """Stop clicking. Does nothing when already idle."""
        if not self.running:
            return

        self._cancel_task()
        self._state.active_interval = None
        self._state.status = "Stopped."
        self._state.transition_to(SchedulerState.IDLE, "stop")
        self._state.notify()

    def toggle(self, profile: Profile) -> bool:
        """Stop if running, otherwise start with profile. Returns running state."""
        if self.running:
            self.stop()
        else:
            self.start(profile.interval, profile.name)
        return self.running

    def tick(self):
        """Post one click at the current pointer location."""
        if not self.running:
            return

        location: Optional[Tuple[float, float]] = self._clicker.pointer_location()
        if location is None:
            log.debug("No pointer location, skipping tick")
            return

        x, y = location
        self._clicker.click(x, y)
        self._state.click_count += 1
        self._state.status = f"Clicked at {int(x)},{int(y)}"
        log.debug(f"Click #{self._state.click_count} at ({x}, {y})")
        self._state.notify()

    def _cancel_task(self):
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
