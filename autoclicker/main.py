"""
AutoClicker - Main entry point.
"""

import sys
import logging
import threading
import tkinter as tk
from typing import Callable, Optional

from .config import Config, default_hotkey, get_config_path, load_config
from .controller import AutoClickerController
from .hotkey import HotkeyDispatcher, Hotkey, parse_hotkey, to_tk_sequence
from .preferences import PreferenceStore
from .profiles import ProfileStore
from .state import AppState
from .timers import ThreadTimers, TkTimers

LOG_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s'

log = logging.getLogger(__name__)


def resolve_hotkey(config: Config, check: Optional[Callable[[Hotkey], Hotkey]] = None) -> Hotkey:
    """
    Parse the configured shortcut, falling back to the platform default.

    `check` (normally global_hotkey.check_hotkey) rejects keys pynput can't watch.
    """
    try:
        hotkey = parse_hotkey(config.hotkey)
        if check is not None:
            check(hotkey)
        return hotkey
    except ValueError as e:
        log.warning(f"Invalid hotkey {config.hotkey!r} ({e}), using {default_hotkey()}")
        return parse_hotkey(default_hotkey())


class AutoClicker:
    """Main application: wires config, controller, window, hotkeys and tray."""

    def __init__(self):
        self.config: Optional[Config] = None
        self.controller: Optional[AutoClickerController] = None
        self.root: Optional[tk.Tk] = None
        self.window = None
        self.tray = None
        self.global_hotkey = None
        self._quit_event = threading.Event()

    def load_config(self):
        """Load or create configuration."""
        log.info("Loading configuration...")
        self.config = load_config()
        try:
            logging.getLogger().setLevel(self.config.log_level)
        except ValueError:
            log.warning(f"Unknown log_level {self.config.log_level!r}, keeping INFO")
        log.info(
            f"Hotkey: {self.config.hotkey}, debounce={self.config.hotkey_debounce_ms}ms, "
            f"tray={self.config.show_tray}"
        )

    def _create_controller(self, timers) -> AutoClickerController:
        from .clicker import MouseClicker

        store = ProfileStore(PreferenceStore())
        controller = AutoClickerController(store, MouseClicker(), timers)
        controller.load_profiles()
        return controller

    def _resolve_hotkey(self) -> Hotkey:
        try:
            from .global_hotkey import check_hotkey
        except ImportError as e:
            log.warning(f"Global hotkey not available: {e}")
            check_hotkey = None
        return resolve_hotkey(self.config, check_hotkey)

    def _start_global_hotkey(self, hotkey: Hotkey, on_trigger: Callable[[], None]):
        try:
            from .global_hotkey import GlobalHotkey
        except ImportError as e:
            log.warning(f"Global hotkey not available: {e}")
            return

        self.global_hotkey = GlobalHotkey(hotkey, on_trigger)
        self.global_hotkey.start()

    def start(self):
        """Start the application. Blocks until quit."""
        log.info("="*60)
        log.info("AutoClicker starting...")
        log.info("="*60)

        self.load_config()
        log.info(f"Config file: {get_config_path()}")

        try:
            self.root = tk.Tk()
        except tk.TclError as e:
            log.warning(f"No display for the window ({e}), running in console mode")
            self._run_console()
            return

        self._run_gui()

    def _run_gui(self):
        from .tray import TrayIcon
        from .ui import AutoClickerWindow

        root = self.root
        self.controller = self._create_controller(TkTimers(root))

        hotkey = self._resolve_hotkey()
        dispatcher = HotkeyDispatcher(
            self.controller.toggle,
            debounce=self.config.hotkey_debounce_ms / 1000.0
        )

        self.window = AutoClickerWindow(
            root,
            self.controller,
            hotkey_sequence=to_tk_sequence(hotkey),
            on_hotkey=lambda: dispatcher.dispatch('window'),
            on_close=self.stop
        )
        self.window.center()

        # pynput calls back on its own thread; hop onto the Tk loop
        self._start_global_hotkey(hotkey, lambda: root.after(0, dispatcher.dispatch, 'global'))

        if self.config.show_tray:
            self.tray = TrayIcon(
                self.controller,
                schedule=lambda fn: root.after(0, fn),
                on_show=self.window.show,
                on_quit=self.stop
            )
            self.tray.start()

        print(f"\nAutoClicker started!")
        print(f"Press {hotkey.display_name()} to start/stop clicking.\n")

        root.mainloop()
        self._quit_event.set()

    def _run_console(self):
        self.controller = self._create_controller(ThreadTimers())

        def log_status(state: AppState):
            log.info(f"{state.status} [clicks: {state.click_count}]")

        self.controller.state.add_listener(log_status)

        hotkey = self._resolve_hotkey()
        dispatcher = HotkeyDispatcher(
            self.controller.toggle,
            debounce=self.config.hotkey_debounce_ms / 1000.0
        )
        self._start_global_hotkey(hotkey, dispatcher.dispatch)

        profile = self.controller.state.selected_profile
        print(f"\nAutoClicker running in console mode (profile: {profile.name}, interval: {profile.interval}s)")
        print(f"Press {hotkey.display_name()} to start/stop clicking, Ctrl+C to quit.\n")
        try:
            while not self._quit_event.is_set():
                self._quit_event.wait(1)
        except KeyboardInterrupt:
            pass

        self.stop()

    def stop(self):
        """Stop clicking and tear everything down."""
        log.info("Stopping AutoClicker...")
        self._quit_event.set()

        if self.controller:
            self.controller.shutdown()

        if self.global_hotkey:
            self.global_hotkey.stop()
            self.global_hotkey = None

        if self.tray:
            self.tray.stop()
            self.tray = None

        if self.root:
            root, self.root = self.root, None
            root.quit()
            root.destroy()

        log.info("AutoClicker stopped")


def main():
    """Main entry point."""
    import signal

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        datefmt='%H:%M:%S'
    )

    app = AutoClicker()

    def signal_handler(signum, frame):
        log.info(f"Received signal {signum}, shutting down...")
        app.stop()
        sys.exit(0)

    # Register signal handlers
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        app.start()
    except KeyboardInterrupt:
        app.stop()
    except Exception as e:
        log.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
