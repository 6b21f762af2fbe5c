"""
Synthetic mouse clicks.

Uses pynput for cross-platform pointer queries and event injection.
"""

import logging
from typing import Optional, Tuple

from pynput import mouse
from pynput.mouse import Button

log = logging.getLogger(__name__)


class MouseClicker:
    """Posts left clicks at the pointer location through pynput."""

    def __init__(self, controller: Optional[mouse.Controller] = None):
        self._mouse_controller = controller if controller is not None else mouse.Controller()

    def pointer_location(self) -> Optional[Tuple[float, float]]:
        """
        Current pointer coordinates, or None when the OS won't report them
        (no display, locked session, etc).
        """
        try:
            position = self._mouse_controller.position
        except Exception as e:
            log.warning(f"Could not read pointer position: {e}")
            return None

        if position is None:
            return None
        x, y = position
        return (x, y)

    def click(self, x: float, y: float):
        """Press and release the left button where the pointer is, (x, y)."""
        try:
            self._mouse_controller.press(Button.left)
            self._mouse_controller.release(Button.left)
        except Exception as e:
            log.warning(f"Error posting click at ({x}, {y}): {e}")
