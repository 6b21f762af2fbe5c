"""
Hotkey parsing and dispatch.

Shortcuts are written in pynput GlobalHotKeys format, e.g. '<ctrl>+<shift>+s'.
The same shortcut is watched globally (pynput) and inside the window
(tkinter bind), so both observers report into one HotkeyDispatcher that
collapses near-simultaneous triggers into a single call.
"""

import re
import sys
import time
import logging
import threading
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

log = logging.getLogger(__name__)

MODIFIERS = ('ctrl', 'shift', 'alt', 'cmd')

MODIFIER_ALIASES = {
    'ctrl': 'ctrl', 'control': 'ctrl',
    'shift': 'shift',
    'alt': 'alt', 'option': 'alt',
    'cmd': 'cmd', 'command': 'cmd', 'super': 'cmd', 'win': 'cmd',
}

# pynput Key names with a different tkinter keysym; F-keys are handled separately
TK_NAMED_KEYS = {
    'space': 'space',
    'tab': 'Tab',
    'esc': 'Escape',
    'enter': 'Return',
    'backspace': 'BackSpace',
    'delete': 'Delete',
    'insert': 'Insert',
    'home': 'Home',
    'end': 'End',
    'page_up': 'Prior',
    'page_down': 'Next',
    'up': 'Up',
    'down': 'Down',
    'left': 'Left',
    'right': 'Right',
    'pause': 'Pause',
}

FUNCTION_KEY = re.compile(r'f([1-9]|1[0-9]|20)')


@dataclass(frozen=True)
class Hotkey:
    """A parsed shortcut: modifier names plus one key."""
    modifiers: FrozenSet[str]
    key: str

    @property
    def named_key(self) -> bool:
        """True for pynput Key names such as 'f8' or 'page_up'."""
        return len(self.key) > 1

    def to_pynput(self) -> str:
        parts = [f"<{m}>" for m in MODIFIERS if m in self.modifiers]
        parts.append(f"<{self.key}>" if self.named_key else self.key)
        return '+'.join(parts)

    def display_name(self, platform: str = sys.platform) -> str:
        names = {
            'ctrl': 'Ctrl',
            'shift': 'Shift',
            'alt': 'Option' if platform == 'darwin' else 'Alt',
            'cmd': 'Cmd' if platform == 'darwin' else 'Win',
        }
        parts = [names[m] for m in MODIFIERS if m in self.modifiers]
        parts.append(self.key.replace('_', ' ').title() if self.named_key else self.key.upper())
        return '+'.join(parts)


def parse_hotkey(text: str) -> Hotkey:
    """
    Split a pynput-style shortcut into modifiers and one key.

    Bracketed key names are not checked here; global_hotkey.check_hotkey
    asks pynput whether it knows them.

    Raises:
        ValueError: malformed token, missing key, or more than one key
    """
    modifiers = set()
    key = None

    for raw in text.lower().split('+'):
        token = raw.strip()
        bracketed = len(token) > 2 and token.startswith('<') and token.endswith('>')
        if bracketed:
            token = token[1:-1]
        if not token:
            raise ValueError(f"Empty token in hotkey {text!r}")

        if token in MODIFIER_ALIASES:
            modifiers.add(MODIFIER_ALIASES[token])
        elif len(token) == 1 or (bracketed and token.replace('_', '').isalnum()):
            if key is not None:
                raise ValueError(f"Hotkey {text!r} has more than one key")
            key = token
        else:
            raise ValueError(f"Unknown key {token!r} in hotkey {text!r}")

    if key is None:
        raise ValueError(f"Hotkey {text!r} has no key")

    return Hotkey(frozenset(modifiers), key)


def to_tk_sequence(hotkey: Hotkey, platform: str = sys.platform) -> Optional[str]:
    """
    tkinter bind() sequence for a hotkey, or None if Tk can't express it.

    Tk on Windows has no modifier for the Windows key.
    """
    tk_modifiers = {
        'ctrl': 'Control',
        'shift': 'Shift',
        'alt': 'Option' if platform == 'darwin' else 'Alt',
    }
    if platform == 'darwin':
        tk_modifiers['cmd'] = 'Command'
    elif platform != 'win32':
        tk_modifiers['cmd'] = 'Mod4'  # Super on X11

    parts = []
    for modifier in MODIFIERS:
        if modifier not in hotkey.modifiers:
            continue
        if modifier not in tk_modifiers:
            return None
        parts.append(tk_modifiers[modifier])

    if hotkey.key in TK_NAMED_KEYS:
        keysym = TK_NAMED_KEYS[hotkey.key]
    elif FUNCTION_KEY.fullmatch(hotkey.key):
        keysym = hotkey.key.upper()
    elif hotkey.named_key:
        # Media keys, vk codes and the like
        return None
    elif hotkey.key.isalpha():
        # Shift changes the reported keysym to the capital letter
        keysym = hotkey.key.upper() if 'shift' in hotkey.modifiers else hotkey.key
    elif hotkey.key.isdigit() and 'shift' not in hotkey.modifiers:
        keysym = hotkey.key
    else:
        # Shifted digits and punctuation have layout-dependent keysyms
        return None

    parts.append(f"KeyPress-{keysym}")
    return f"<{'-'.join(parts)}>"


class HotkeyDispatcher:
    """
    Single entry point for every hotkey observer.

    Triggers arriving within `debounce` seconds of the last accepted one are
    dropped, so a key press seen by both the global and the in-window
    listener toggles once.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        debounce: float = 0.3,
        clock: Callable[[], float] = time.monotonic
    ):
        self._callback = callback
        self._debounce = debounce
        self._clock = clock
        self._last_accepted: Optional[float] = None
        self._lock = threading.Lock()

    def dispatch(self, source: str = 'global') -> bool:
        """Run the callback unless a trigger was just accepted. Returns True if run."""
        with self._lock:
            now = self._clock()
            if self._last_accepted is not None and now - self._last_accepted < self._debounce:
                log.debug(f"Ignoring duplicate hotkey from {source}")
                return False
            self._last_accepted = now

        log.info(f"Hotkey triggered ({source})")
        try:
            self._callback()
        except Exception:
            log.exception("Error in hotkey callback")
        return True
