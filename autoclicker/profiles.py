"""
Click profiles and their persistence.

There are always exactly four profile slots. Each slot keeps its interval as
the text the user typed; it is only parsed when clicking starts.
"""

import logging
from dataclasses import dataclass
from typing import List

from .preferences import PreferenceStore

log = logging.getLogger(__name__)

PROFILE_COUNT = 4

DEFAULT_PROFILES = (
    ('Default', '30'),
    ('Profile 1', ''),
    ('Profile 2', ''),
    ('Profile 3', ''),
)


@dataclass
class Profile:
    """A named click interval."""
    name: str
    interval: str = ''


def name_key(index: int) -> str:
    return f"profile_name_{index}"


def interval_key(index: int) -> str:
    return f"profile_interval_{index}"


def default_profiles() -> List[Profile]:
    """Fresh copies of the compiled-in defaults."""
    return [Profile(name, interval) for name, interval in DEFAULT_PROFILES]


class ProfileStore:
    """
    Holds the four profiles and syncs them with a PreferenceStore.

    The profiles list is created once and mutated in place, so other
    objects may keep a reference to it.
    """

    def __init__(self, preferences: PreferenceStore):
        self._preferences = preferences
        self.profiles: List[Profile] = default_profiles()

    def _check_index(self, index: int):
        if not 0 <= index < PROFILE_COUNT:
            raise IndexError(f"Profile index {index} out of range 0..{PROFILE_COUNT - 1}")

    def get(self, index: int) -> Profile:
        self._check_index(index)
        return self.profiles[index]

    def load(self):
        """
        Load saved names and intervals.

        Missing or empty values keep whatever is already in memory, which on
        a fresh store is the compiled-in default.
        """
        for index, profile in enumerate(self.profiles):
            saved_name = self._preferences.get_string(name_key(index))
            if saved_name:
                profile.name = saved_name

            saved_interval = self._preferences.get_string(interval_key(index))
            if saved_interval:
                profile.interval = saved_interval

        log.info(f"Loaded profiles: {[p.name for p in self.profiles]}")

    def save(self, index: int):
        """
        Persist one profile.

        Raises:
            IndexError: index outside 0..3
            StorageError: the preference file could not be written
        """
        profile = self.get(index)
        self._preferences.set_many({
            name_key(index): profile.name,
            interval_key(index): profile.interval,
        })
        log.info(f"Saved profile {index}: {profile.name!r} interval={profile.interval!r}")
