"""Key-value stores for the best score and player preferences."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal store used by the score board."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: int) -> None: ...


class MemoryStore:
    """Dict-backed store, used by tests and headless runs."""

    def __init__(self, initial: Optional[dict[str, Any]] = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: int) -> None:
        self._data[key] = value

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)


class JsonFileStore:
    """Persistent store using a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load data from file. Missing or malformed files load as empty."""
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                self._data = data
                logger.info(f"Loaded {len(self._data)} stored values from {self.path}")
            else:
                logger.warning(f"Ignoring store {self.path}: expected an object")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load store {self.path}: {e}")

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
        except OSError as e:
            logger.error(f"Failed to save store {self.path}: {e}")

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: int) -> None:
        self._data[key] = value
        self._save()
