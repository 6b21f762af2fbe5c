"""
System-wide hotkey listener.

Uses pynput GlobalHotKeys so the shortcut works while other applications
have focus. The callback runs on the pynput listener thread and must return
quickly; GUI callers pass something that re-posts onto the Tk event loop.
"""

import logging
from typing import Callable, Optional

from pynput import keyboard

from .hotkey import Hotkey

log = logging.getLogger(__name__)


def check_hotkey(hotkey: Hotkey) -> Hotkey:
    """
    Make sure pynput can listen for this shortcut.

    Raises:
        ValueError: pynput does not know one of the keys
    """
    keyboard.HotKey.parse(hotkey.to_pynput())
    return hotkey


class GlobalHotkey:
    """Watches for one shortcut anywhere on the desktop."""

    def __init__(self, hotkey: Hotkey, on_trigger: Callable[[], None]):
        self._hotkey = hotkey
        self._on_trigger = on_trigger
        self._listener: Optional[keyboard.GlobalHotKeys] = None

    @property
    def running(self) -> bool:
        return self._listener is not None

    def _fire(self):
        try:
            self._on_trigger()
        except Exception as e:
            log.error(f"Error in hotkey callback: {e}")

    def start(self) -> bool:
        """Start the listener. Returns False if the OS refused it."""
        if self._listener is not None:
            log.warning("Global hotkey already running")
            return False

        combo = self._hotkey.to_pynput()
        try:
            self._listener = keyboard.GlobalHotKeys({combo: self._fire})
            self._listener.start()
        except Exception as e:
            # macOS without accessibility permission, Wayland, etc
            log.error(f"Failed to register global hotkey {combo}: {e}")
            self._listener = None
            return False

        log.info(f"Global hotkey registered: {self._hotkey.display_name()}")
        return True

    def stop(self):
        """Stop the listener."""
        if self._listener is None:
            return
        self._listener.stop()
        self._listener = None
        log.info("Global hotkey stopped")
