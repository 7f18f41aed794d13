"""Fixed-cadence frame loop."""

import logging
import threading
import time
from typing import Callable

from .led_grid import LedGrid
from .producers import ContentProducer

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Render and dispatch frames at a fixed rate.

    Each tick calls ``producer.render`` and then ``grid.send_to_devices``.
    Ticks are scheduled against absolute deadlines; when a tick overruns,
    the schedule resets rather than bursting to catch up.

    Example:
        ```python
        loop = FrameLoop(grid, CornerTestPattern(), fps=60)
        loop.run_for(5.0)
        ```
    """

    def __init__(
        self,
        grid: LedGrid,
        producer: ContentProducer,
        fps: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.grid = grid
        self.producer = producer
        self.fps = fps
        self._clock = clock
        self._stop_event = threading.Event()
        self.frames_sent = 0
        self.failed_frames = 0

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps

    def stop(self) -> None:
        """Ask a running loop to return after the current frame."""
        self._stop_event.set()

    @property
    def is_stopped(self) -> bool:
        return self._stop_event.is_set()

    def tick(self) -> bool:
        """Render and send one frame."""
        self.producer.render(self.grid, self.grid.window_width, self.grid.window_height)
        ok = self.grid.send_to_devices()
        self.frames_sent += 1
        if not ok:
            self.failed_frames += 1
        return ok

    def run_frames(self, count: int) -> int:
        """
        Run up to ``count`` frames.

        Returns:
            Number of frames sent (fewer if stop() was called)
        """
        return self._run(lambda sent, now: sent < count)

    def run_for(self, seconds: float) -> int:
        """
        Run until ``seconds`` have elapsed.

        Returns:
            Number of frames sent
        """
        deadline = self._clock() + seconds
        return self._run(lambda sent, now: now < deadline)

    def _run(self, keep_going: Callable[[int, float], bool]) -> int:
        self._stop_event.clear()
        sent = 0
        next_tick = self._clock()
        logger.info(f"Frame loop started at {self.fps} fps")

        while not self._stop_event.is_set() and keep_going(sent, self._clock()):
            self.tick()
            sent += 1
            if not keep_going(sent, self._clock()):
                break

            next_tick += self.frame_interval
            delay = next_tick - self._clock()
            if delay > 0:
                if self._stop_event.wait(delay):
                    break
            else:
                next_tick = self._clock()

        logger.info(f"Frame loop stopped after {sent} frames ({self.failed_frames} failed)")
        return sent
