"""
Frame-rate sampling.

The renderer wraps every frame in PerformanceSampler.capture(). Leaving that
scope checks whether the current one-second window has closed and, if so,
publishes a frames-per-second figure to the registered listeners.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass


_LOGGER = logging.getLogger(__name__)


def _monotonic_ms():
    return time.monotonic() * 1000.0


@dataclass
class FrameTimingState:
    """Counters for the current sampling window."""

    window_start_tick: float = 0.0
    frame_count: int = 0
    last_fps: int = 0


class PerformanceSampler:
    """
    Amortized FPS measurement.

    Usage:
        sampler = PerformanceSampler(clock=pygame.time.get_ticks)
        sampler.add_listener(lambda fps: print(fps))

        with sampler.capture():
            draw_frame()
            sampler.count_frame()

    Attributes:
        state: The FrameTimingState being accumulated
    """

    WINDOW_MS = 1000

    def __init__(self, clock=None):
        """
        Args:
            clock: Callable returning a monotonic timestamp in milliseconds
                (default: time.monotonic scaled to ms)
        """
        self._clock = clock or _monotonic_ms
        self._listeners = []
        self.state = FrameTimingState(window_start_tick=self._clock())

    @property
    def fps(self):
        return self.state.last_fps

    def add_listener(self, callback):
        """Register callback(fps) to be called whenever a window closes."""
        self._listeners.append(callback)

    def restart(self):
        """Start a fresh window, discarding frames counted so far."""
        self.state.window_start_tick = self._clock()
        self.state.frame_count = 0

    def count_frame(self):
        self.state.frame_count += 1

    @contextmanager
    def capture(self):
        """Per-frame scope; the window check runs on every exit path."""
        try:
            yield self
        finally:
            self._finalize()

    def _finalize(self):
        now = self._clock()
        elapsed_ms = now - self.state.window_start_tick
        if elapsed_ms < self.WINDOW_MS:
            return

        elapsed_seconds = elapsed_ms / 1000.0
        fps = int(round(self.state.frame_count / elapsed_seconds))
        self.state.frame_count = 0
        self.state.window_start_tick = now
        self.state.last_fps = fps

        _LOGGER.debug("%d fps over %.3f s", fps, elapsed_seconds)
        for callback in self._listeners:
            callback(fps)
