"""
Key-value preference store backed by a flat YAML file.

Values are strings keyed by name. Absent keys are normal (first run) and
read back as None. Every write is flushed to disk immediately.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Optional

from .config import get_preferences_path

log = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when preferences cannot be written."""


class PreferenceStore:
    """String key-value store persisted to a YAML mapping."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path if path is not None else get_preferences_path()
        self._values: Dict[str, str] = {}
        self._loaded = False

    def _ensure_loaded(self):
        if self._loaded:
            return
        self._loaded = True
        self._values = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            log.warning(f"Could not read preferences from {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            log.warning(f"Ignoring malformed preferences file {self.path}")
            return {}

        # Hand-edited files may hold unquoted numbers; keep scalars as text
        return {
            str(key): value if isinstance(value, str) else str(value)
            for key, value in data.items()
            if isinstance(value, (str, int, float)) and not isinstance(value, bool)
        }

    def reload(self):
        """Discard cached values and re-read the backing file."""
        self._loaded = False
        self._ensure_loaded()

    def get_string(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None if absent."""
        self._ensure_loaded()
        return self._values.get(key)

    def set_string(self, key: str, value: str):
        """Store value under key and write the file."""
        self.set_many({key: value})

    def set_many(self, values: Dict[str, str]):
        """Store several values with a single write."""
        self._ensure_loaded()
        updated = dict(self._values)
        updated.update(values)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                yaml.safe_dump(updated, f, default_flow_style=False)
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(str(e)) from e

        self._values = updated
        log.debug(f"Wrote {len(values)} preference(s) to {self.path}")
