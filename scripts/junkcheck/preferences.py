"""
Key-value preference stores for block list overrides.

Only booleans are stored. A missing key means "use the block list default".
"""

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


class Preferences(ABC):
    """Minimal boolean preference interface."""

    @abstractmethod
    def get_boolean(self, key: str) -> Optional[bool]:
        """Return the stored value, or None if unset."""
        ...

    @abstractmethod
    def set_boolean(self, key: str, value: bool) -> None: ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key. Removing a missing key is not an error."""
        ...


class MemoryPreferences(Preferences):
    """Process-local preferences."""

    def __init__(self, values: Optional[dict[str, bool]] = None):
        self._values: dict[str, bool] = dict(values or {})
        self._lock = threading.Lock()

    def get_boolean(self, key: str) -> Optional[bool]:
        with self._lock:
            return self._values.get(key)

    def set_boolean(self, key: str, value: bool) -> None:
        with self._lock:
            self._values[key] = bool(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._values)


class YamlPreferences(Preferences):
    """Preferences persisted to a YAML file after every change."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._values = self._load()

    def _load(self) -> dict[str, bool]:
        if not self.path.exists():
            return {}

        with open(self.path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {self.path}: expected a mapping")
            return {}

        values: dict[str, bool] = {}
        for key, value in data.items():
            if isinstance(value, bool):
                values[str(key)] = value
            else:
                logger.warning(f"Ignoring non-boolean preference {key}={value!r}")
        return values

    def _save(self, values: dict[str, bool]) -> None:
        """Write values, then make them current. A failed write changes nothing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            yaml.safe_dump(values, f, default_flow_style=False, sort_keys=True)
        self._values = values

    def get_boolean(self, key: str) -> Optional[bool]:
        with self._lock:
            return self._values.get(key)

    def set_boolean(self, key: str, value: bool) -> None:
        with self._lock:
            values = dict(self._values)
            values[key] = bool(value)
            self._save(values)

    def remove(self, key: str) -> None:
        with self._lock:
            if key in self._values:
                values = dict(self._values)
                del values[key]
                self._save(values)
