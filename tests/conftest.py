import heapq
import itertools

import pytest

from autoclicker.controller import AutoClickerController
from autoclicker.preferences import PreferenceStore
from autoclicker.profiles import ProfileStore


class ManualTimers:
    """Timer backend driven by advance() instead of wall time."""

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._ids = itertools.count()
        self._cancelled = set()

    def call_later(self, delay, callback):
        handle = next(self._ids)
        heapq.heappush(self._queue, (self.now + delay, handle, callback))
        return handle

    def cancel(self, handle):
        self._cancelled.add(handle)

    @property
    def pending(self):
        return [h for _, h, _ in self._queue if h not in self._cancelled]

    def advance(self, seconds):
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            when, handle, callback = heapq.heappop(self._queue)
            self.now = when
            if handle in self._cancelled:
                continue
            callback()
        self.now = target


class FakeClicker:
    def __init__(self, location=(100.7, 200.2)):
        self.location = location
        self.clicks = []

    def pointer_location(self):
        return self.location

    def click(self, x, y):
        self.clicks.append((x, y))


@pytest.fixture
def timers():
    return ManualTimers()


@pytest.fixture
def clicker():
    return FakeClicker()


@pytest.fixture
def prefs_path(tmp_path):
    return tmp_path / 'preferences.yaml'


@pytest.fixture
def controller(prefs_path, clicker, timers):
    store = ProfileStore(PreferenceStore(prefs_path))
    controller = AutoClickerController(store, clicker, timers)
    controller.load_profiles()
    return controller
