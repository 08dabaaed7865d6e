"""
CryptoNoise persistent configuration.

Loads/saves settings from ~/.cryptonoise/config.json.
"""

import copy
import json
from pathlib import Path
from typing import Any, Optional

from cryptonoise.core.log import get_logger

logger = get_logger('config')


DEFAULTS = {
    "generator": {
        "base_length": 64,
        "symbol_ratio": 0.7,
        "min_length": 15,
        "max_length": 20,
    },
    "cli": {
        "count": 1,
        "reveal": False,
    },
}

CONFIG_DIR = Path.home() / ".cryptonoise"
CONFIG_FILE = CONFIG_DIR / "config.json"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning a new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict):
            if isinstance(value, dict):
                result[key] = _deep_merge(result[key], value)
            else:
                logger.warning("Ignoring config entry %r: expected an object, got %s",
                               key, type(value).__name__)
        else:
            result[key] = value
    return result


class Config:
    """Persistent configuration with deep-merge defaults."""

    def __init__(self, config_file: Optional[Path] = None):
        self._file = Path(config_file) if config_file else CONFIG_FILE
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._file

    def _load(self) -> dict:
        """Load config from file, deep-merged with defaults."""
        if self._file.exists():
            try:
                with open(self._file, 'r') as f:
                    user_data = json.load(f)
                if isinstance(user_data, dict):
                    return _deep_merge(DEFAULTS, user_data)
                logger.warning("Ignoring %s: top level is not an object", self._file)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self._file, e)
        return copy.deepcopy(DEFAULTS)

    def get(self, section: str, key: str) -> Any:
        """Get a config value."""
        values = self._data.get(section)
        return values.get(key) if isinstance(values, dict) else None

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a config value."""
        if not isinstance(self._data.get(section), dict):
            self._data[section] = {}
        self._data[section][key] = value

    def save(self) -> None:
        """Save config to file."""
        self._file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._file, 'w') as f:
            json.dump(self._data, f, indent=2)
