"""Best score and boolean preferences on top of a key-value store."""

import logging
from typing import Any, Optional

from sparkrun.storage.store import KeyValueStore

logger = logging.getLogger(__name__)


def parse_score(value: Any) -> int:
    """Read a stored score. Anything malformed or negative reads as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        score = int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Ignoring malformed stored score: {value!r}")
        return 0
    return max(0, score)


class ScoreBoard:
    """Keeps one profile's best score in sync with the store."""

    def __init__(self, store: KeyValueStore, best_key: str = "best") -> None:
        self.store = store
        self.best_key = best_key
        self._best = 0
        self.refresh()

    @property
    def best(self) -> int:
        return self._best

    def refresh(self) -> int:
        """Re-read the best score from the store."""
        self._best = parse_score(self.store.get(self.best_key))
        return self._best

    def record(self, score: int) -> bool:
        """Record a finished run. Writes and returns True only on a new best."""
        if score <= self._best:
            return False
        self._best = score
        self.store.set(self.best_key, score)
        logger.info(f"New best score {score} ({self.best_key})")
        return True

    def reset_best(self) -> None:
        self._best = 0
        self.store.set(self.best_key, 0)

    def get_flag(self, key: Optional[str], default: bool = False) -> bool:
        if key is None:
            return default
        value = self.store.get(key)
        if value is None:
            return default
        return str(value) in ("1", "true", "True")

    def set_flag(self, key: Optional[str], value: bool) -> None:
        if key is None:
            return
        self.store.set(key, 1 if value else 0)
