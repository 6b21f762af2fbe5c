"""
Configuration loading and management.
"""

import os
import sys
import logging
import yaml
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

APP_DIR_NAME = 'autoclicker'
DEFAULT_DEBOUNCE_MS = 300


def default_hotkey(platform: str = sys.platform) -> str:
    """Default toggle shortcut in pynput GlobalHotKeys format."""
    if platform == 'darwin':
        return '<cmd>+<shift>+s'
    # Win+Shift+S is the Windows snipping tool, so use Ctrl elsewhere
    return '<ctrl>+<shift>+s'


@dataclass
class Config:
    """Main application configuration."""
    hotkey: str = ''
    hotkey_debounce_ms: int = DEFAULT_DEBOUNCE_MS
    show_tray: bool = True
    log_level: str = 'INFO'

    def __post_init__(self):
        if not self.hotkey:
            self.hotkey = default_hotkey()


def get_config_dir() -> Path:
    """Get the per-user directory holding config and preferences."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', '~')).expanduser()
    elif os.name == 'posix':
        if sys.platform == 'darwin':  # macOS
            base = Path.home() / 'Library' / 'Application Support'
        else:  # Linux
            base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))
    else:
        base = Path.home()

    return base / APP_DIR_NAME


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / 'config.yaml'


def get_preferences_path() -> Path:
    """Get the path of the key-value store holding saved profiles."""
    return get_config_dir() / 'preferences.yaml'


def parse_bool(value, default: bool) -> bool:
    """Parse a YAML scalar as a bool, accepting common string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', 'yes', 'on', '1'):
            return True
        if lowered in ('false', 'no', 'off', '0'):
            return False
    return default


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file."""
    if path is None:
        path = get_config_path()

    if not path.exists():
        return create_default_config(path)

    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        log.warning(f"Ignoring malformed config file {path}")
        return Config()

    config = Config()

    hotkey = data.get('hotkey')
    if isinstance(hotkey, str) and hotkey.strip():
        config.hotkey = hotkey.strip()

    try:
        debounce = int(data.get('hotkey_debounce_ms', DEFAULT_DEBOUNCE_MS))
        config.hotkey_debounce_ms = max(0, debounce)
    except (TypeError, ValueError):
        log.warning("hotkey_debounce_ms must be an integer, using default")

    config.show_tray = parse_bool(data.get('show_tray'), True)

    level = data.get('log_level')
    if isinstance(level, str) and level.strip():
        config.log_level = level.strip().upper()

    return config


def create_default_config(path: Path) -> Config:
    """Create and save a default configuration."""
    default_yaml = f"""# AutoClicker Configuration

# Global shortcut that starts/stops clicking (pynput GlobalHotKeys format)
hotkey: '{default_hotkey()}'

# Hotkey presses closer together than this are treated as one
hotkey_debounce_ms: {DEFAULT_DEBOUNCE_MS}

# Show an icon in the system tray
show_tray: true

# DEBUG, INFO, WARNING or ERROR
log_level: INFO
"""

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        f.write(default_yaml)

    return load_config(path)


def save_config(config: Config, path: Optional[Path] = None):
    """Save configuration to YAML file."""
    if path is None:
        path = get_config_path()

    data = {
        'hotkey': config.hotkey,
        'hotkey_debounce_ms': config.hotkey_debounce_ms,
        'show_tray': config.show_tray,
        'log_level': config.log_level,
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False)
