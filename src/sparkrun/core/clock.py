"""Frame clock with a bounded time step."""

import math
from typing import Optional


class FrameClock:
    """Turns raw host frame times into a clamped simulation delta.

    A stalled tab or a slow frame can hand over a delta of several
    seconds. Every delta is clamped to [0, max_step].
    """

    def __init__(self, max_step: float = 0.033) -> None:
        self.max_step = max_step
        self._last: Optional[float] = None

    def tick(self, raw_elapsed: float) -> float:
        """Clamp a raw elapsed time in seconds. NaN and negatives give 0."""
        if raw_elapsed is None or math.isnan(raw_elapsed) or raw_elapsed <= 0.0:
            return 0.0
        return min(raw_elapsed, self.max_step)

    def since(self, now: float, millis: bool = False) -> float:
        """Measure the delta from the previous timestamp and clamp it.

        The first call only records the timestamp and returns 0.

        Args:
            now: Host timestamp (seconds, or milliseconds when millis=True)
            millis: Whether timestamps are in milliseconds
        """
        seconds = now / 1000.0 if millis else now
        if self._last is None:
            self._last = seconds
            return 0.0
        raw = seconds - self._last
        self._last = seconds
        return self.tick(raw)

    def reset(self) -> None:
        """Forget the last timestamp (after a pause or restart)."""
        self._last = None
