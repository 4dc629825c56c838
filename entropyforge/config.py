"""
EntropyForge persistent configuration.

Loads/saves settings from ~/.entropyforge/config.json. Only tuning knobs
live here; no entropy or password material is ever persisted.
"""

import copy
import json
from pathlib import Path
from typing import Any, Optional

from entropyforge.core.log import get_logger

logger = get_logger('config')


DEFAULTS = {
    "pool": {
        "bits_per_sample": 2,
        "bits_per_generation": 16,
        "max_bits": 256,
    },
    "generator": {
        "length": 16,
        "margin_factor": 4,
        "lower": True,
        "upper": True,
        "digits": True,
        "symbols": True,
        "exclude_ambiguous": True,
    },
}

CONFIG_DIR = Path.home() / ".entropyforge"
CONFIG_FILE = CONFIG_DIR / "config.json"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning a new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
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
        return self._data.get(section, {}).get(key)

    def set(self, section: str, key: str, value: Any) -> None:
        """Set a config value."""
        if section not in self._data:
            self._data[section] = {}
        self._data[section][key] = value

    def save(self) -> None:
        """Save config to file."""
        self._file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._file, 'w') as f:
            json.dump(self._data, f, indent=2)
