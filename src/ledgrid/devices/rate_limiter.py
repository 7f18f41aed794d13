"""Per-channel transmit rate limiting."""

import threading
import time
from collections.abc import Callable


class RateLimiter:
    """
    Drop frames that arrive faster than a minimum interval.

    Frames are never queued: a caller that is too early simply gets
    ``False`` and the frame is discarded. The timestamp check and update
    happen together under a lock, so when two threads race for the same
    slot only one wins.

    Example:
        ```python
        limiter = RateLimiter(min_interval=0.008)
        if limiter.try_acquire():
            sock.sendto(packet, address)
        ```
    """

    def __init__(self, min_interval: float = 0.008, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the limiter.

        Args:
            min_interval: Minimum seconds between accepted frames
            clock: Monotonic time source (injectable for tests)
        """
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock
        self._last: float | None = None
        self._lock = threading.Lock()

    @property
    def last_sent(self) -> float | None:
        """Clock value of the last accepted frame (None before the first)."""
        return self._last

    def try_acquire(self) -> bool:
        """Claim the next send slot; False means drop this frame."""
        now = self._clock()
        with self._lock:
            if self._last is not None and now - self._last < self.min_interval:
                return False
            self._last = now
            return True

    def mark(self) -> None:
        """Record a send that bypassed the gate (e.g. turn-off)."""
        now = self._clock()
        with self._lock:
            self._last = now

    def reset(self) -> None:
        """Forget the last send so the next frame passes immediately."""
        with self._lock:
            self._last = None
