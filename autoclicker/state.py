"""
Application state.

States:
- idle: no clicks are scheduled
- running: a periodic task clicks at the pointer location every interval
"""

import time
import logging
from enum import Enum, auto
from typing import Callable, List, Optional
from dataclasses import dataclass, field

from .profiles import Profile, PROFILE_COUNT, default_profiles

log = logging.getLogger(__name__)


class SchedulerState(Enum):
    IDLE = auto()
    RUNNING = auto()


@dataclass
class StateChange:
    """Represents a state transition."""
    old_state: SchedulerState
    new_state: SchedulerState
    reason: str
    timestamp: float


@dataclass
class AppState:
    """
    Everything the window renders.

    The controller and scheduler mutate this object and call notify();
    views register listeners and redraw from it.
    """
    profiles: List[Profile] = field(default_factory=default_profiles)
    selected_index: int = 0
    scheduler_state: SchedulerState = SchedulerState.IDLE
    click_count: int = 0
    active_interval: Optional[float] = None
    status: str = ''

    def __post_init__(self):
        self._listeners: List[Callable[['AppState'], None]] = []
        self._transition_listeners: List[Callable[[StateChange], None]] = []

    @property
    def running(self) -> bool:
        return self.scheduler_state == SchedulerState.RUNNING

    @property
    def selected_profile(self) -> Profile:
        return self.profiles[self.selected_index]

    def select(self, index: int):
        if not 0 <= index < PROFILE_COUNT:
            raise IndexError(f"Profile index {index} out of range 0..{PROFILE_COUNT - 1}")
        self.selected_index = index

    def add_listener(self, callback: Callable[['AppState'], None]):
        """Add a listener called after any change."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[['AppState'], None]):
        """Remove a change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def add_transition_listener(self, callback: Callable[[StateChange], None]):
        """Add a listener called on Idle/Running transitions."""
        self._transition_listeners.append(callback)

    def notify(self):
        """Notify all listeners of a change."""
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                log.exception("State listener failed")

    def transition_to(self, new_state: SchedulerState, reason: str):
        """Change scheduler state and notify transition listeners."""
        if new_state == self.scheduler_state:
            return

        change = StateChange(
            old_state=self.scheduler_state,
            new_state=new_state,
            reason=reason,
            timestamp=time.time()
        )
        self.scheduler_state = new_state
        log.info(f"State change: {change.old_state.name} -> {change.new_state.name} (reason: {reason})")

        for listener in list(self._transition_listeners):
            try:
                listener(change)
            except Exception:
                log.exception("Transition listener failed")
