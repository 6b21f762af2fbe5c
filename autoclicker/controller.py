"""
Application controller.

Every surface (window, hotkeys, tray) calls into this object; it is the only
thing that mutates AppState outside the scheduler.
"""

import logging
from typing import Optional

from .preferences import StorageError
from .profiles import ProfileStore
from .scheduler import ClickScheduler
from .state import AppState

log = logging.getLogger(__name__)


class AutoClickerController:
    """Owns the profile store, the scheduler and the shared state."""

    def __init__(self, store: ProfileStore, clicker, timers):
        self.store = store
        self.state = AppState(profiles=store.profiles)
        self.scheduler = ClickScheduler(self.state, clicker, timers)

    @property
    def running(self) -> bool:
        return self.state.running

    def load_profiles(self):
        """Load saved profiles over the defaults."""
        self.store.load()
        self.state.status = "Loaded saved profiles"
        self.state.notify()

    def select_profile(self, index: int):
        self.state.select(index)
        self.state.notify()

    def edit_profile(self, name: Optional[str] = None, interval: Optional[str] = None) -> bool:
        """
        Change the selected profile in memory.

        Editing isn't offered while clicking; returns False and changes nothing.
        """
        if self.running:
            return False

        profile = self.state.selected_profile
        changed = False
        if name is not None and name != profile.name:
            profile.name = name
            changed = True
        if interval is not None and interval != profile.interval:
            profile.interval = interval
            changed = True

        if changed:
            self.state.notify()
        return True

    def save_profile(self) -> bool:
        """Persist the selected profile. Returns True if it was written."""
        if self.running:
            return False

        index = self.state.selected_index
        profile = self.state.selected_profile
        try:
            self.store.save(index)
        except StorageError as e:
            log.warning(f"Could not save profile {index}: {e}")
            self.state.status = f"Could not save {profile.name}: {e}"
            self.state.notify()
            return False

        self.state.status = f"Saved {profile.name}: {profile.interval}s"
        self.state.notify()
        return True

    def start(self) -> bool:
        profile = self.state.selected_profile
        return self.scheduler.start(profile.interval, profile.name)

    def stop(self):
        self.scheduler.stop()

    def toggle(self) -> bool:
        """Start or stop clicking with the selected profile."""
        return self.scheduler.toggle(self.state.selected_profile)

    def shutdown(self):
        """Stop clicking before exit."""
        self.scheduler.stop()
