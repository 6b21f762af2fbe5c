"""
Optional system tray icon.

Shows whether clicking is running and offers Start/Stop, Show Window and
Quit. Menu callbacks run on the pystray thread; `schedule` must hand them
to the thread that owns the controller.
"""

import sys
import logging
import threading
from typing import Callable, Optional

# Handle imports for when pystray/PIL aren't available
try:
    import pystray
    from PIL import Image, ImageDraw
    TRAY_AVAILABLE = True
except ImportError:
    TRAY_AVAILABLE = False

from .controller import AutoClickerController
from .state import SchedulerState, StateChange

log = logging.getLogger(__name__)


def tray_supported() -> bool:
    """pystray needs the main thread on macOS, which tkinter already owns."""
    return TRAY_AVAILABLE and sys.platform != 'darwin'


def create_icon(active: bool = False) -> 'Image.Image':
    """Create tray icon image."""
    size = 64
    img = Image.new('RGBA', (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    # Background circle
    bg_color = (76, 175, 80, 255) if active else (158, 158, 158, 255)
    draw.ellipse([4, 4, size-4, size-4], fill=bg_color)

    # Mouse body
    mouse_color = (255, 255, 255, 255)
    draw.rounded_rectangle([20, 14, 44, 50], radius=12, fill=mouse_color)
    # Button split
    draw.line([32, 14, 32, 28], fill=bg_color, width=2)
    draw.line([20, 28, 44, 28], fill=bg_color, width=2)

    return img


class TrayIcon:
    """pystray icon bound to the controller."""

    def __init__(
        self,
        controller: AutoClickerController,
        schedule: Callable[[Callable[[], None]], None],
        on_show: Callable[[], None],
        on_quit: Callable[[], None]
    ):
        self._controller = controller
        self._schedule = schedule
        self._on_show = on_show
        self._on_quit = on_quit
        self._icon: Optional['pystray.Icon'] = None
        self._thread: Optional[threading.Thread] = None

    def _create_menu(self):
        def get_status(item):
            return f"Status: {self._controller.state.scheduler_state.name.title()}"

        def get_toggle_text(item):
            return "Stop" if self._controller.running else "Start"

        def toggle(icon, item):
            self._schedule(self._controller.toggle)

        def show(icon, item):
            self._schedule(self._on_show)

        def quit_app(icon, item):
            log.info("Quit requested from tray menu")
            self._schedule(self._on_quit)

        return pystray.Menu(
            pystray.MenuItem(get_status, None, enabled=False),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem(get_toggle_text, toggle, default=True),
            pystray.MenuItem("Show Window", show),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Quit", quit_app)
        )

    def _on_state_change(self, change: StateChange):
        if not self._icon:
            return
        try:
            self._icon.icon = create_icon(active=change.new_state == SchedulerState.RUNNING)
            self._icon.update_menu()
        except Exception as e:
            log.error(f"Error updating tray icon: {e}")

    def start(self) -> bool:
        if not tray_supported():
            log.info("System tray not available on this platform")
            return False

        self._icon = pystray.Icon(
            'autoclicker',
            create_icon(active=self._controller.running),
            'AutoClicker',
            menu=self._create_menu()
        )
        self._controller.state.add_transition_listener(self._on_state_change)
        self._thread = threading.Thread(target=self._icon.run, name="TrayIcon", daemon=True)
        self._thread.start()
        log.info("System tray icon started")
        return True

    def stop(self):
        if self._icon:
            self._icon.stop()
            self._icon = None
        if self._thread:
            self._thread.join(timeout=1.0)
            self._thread = None
