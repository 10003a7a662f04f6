"""
Frame scheduler for ReelCast.
Turns wall-clock frames into capped millisecond deltas for the game.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable

import pygame

logger = logging.getLogger(__name__)

DEFAULT_MAX_DELTA_MS = 100.0


def _perf_counter_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass
class FrameStats:
    """Statistics for one frame."""

    frame_number: int
    delta_ms: float
    duration_ms: float


class FrameScheduler:
    """
    Calls a callback once per frame with the elapsed milliseconds.

    The delta is capped so a stalled or backgrounded window does not make
    the simulation jump. The first frame after start() only records the
    baseline and does not call the callback.
    """

    def __init__(
        self,
        callback: Callable[[float], None],
        fps: int = 60,
        max_delta_ms: float = DEFAULT_MAX_DELTA_MS,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        self._callback = callback
        self._fps = fps
        self._max_delta_ms = max_delta_ms
        self._time_source = time_source or _perf_counter_ms

        self._is_running = False
        self._last_time: float | None = None
        self._frame_number = 0

        # Frame statistics
        self._recent_stats: list[FrameStats] = []
        self._max_stats_history = 100

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def frame_number(self) -> int:
        """Number of frames delivered to the callback."""
        return self._frame_number

    @property
    def frame_budget_ms(self) -> float:
        return 1000.0 / self._fps

    def start(self) -> None:
        """Start delivering frames. No-op if already running."""
        if self._is_running:
            return
        self._is_running = True
        self._last_time = None
        logger.info(f"Frame scheduler started ({self._fps} fps, delta cap {self._max_delta_ms:.0f}ms)")

    def stop(self) -> None:
        """Stop delivering frames and forget the timing baseline."""
        if not self._is_running:
            return
        self._is_running = False
        self._last_time = None
        logger.info(f"Frame scheduler stopped after {self._frame_number} frames")

    def frame(self, now: float | None = None) -> float | None:
        """
        Process one frame.

        Returns the delta handed to the callback, or None when no callback
        was made (stopped, or first frame after start).
        """
        if not self._is_running:
            return None

        now = self._time_source() if now is None else now
        if self._last_time is None:
            self._last_time = now
            return None

        delta_ms = min(max(0.0, now - self._last_time), self._max_delta_ms)
        self._last_time = now
        self._frame_number += 1

        start = time.perf_counter()
        self._callback(delta_ms)
        duration_ms = (time.perf_counter() - start) * 1000

        self._record_stats(FrameStats(self._frame_number, delta_ms, duration_ms))
        if duration_ms > self.frame_budget_ms:
            logger.warning(
                f"Frame {self._frame_number} took {duration_ms:.1f}ms "
                f"(budget: {self.frame_budget_ms:.1f}ms)"
            )
        return delta_ms

    def run(self, pump: Callable[[], bool]) -> None:
        """
        Drive frames until pump() returns False.

        pump() runs before every frame (event handling); pacing uses
        pygame's clock.
        """
        clock = pygame.time.Clock()
        self.start()
        try:
            while pump():
                clock.tick(self._fps)
                self.frame()
        finally:
            self.stop()

    def _record_stats(self, stats: FrameStats) -> None:
        self._recent_stats.append(stats)
        if len(self._recent_stats) > self._max_stats_history:
            self._recent_stats.pop(0)

    def get_stats(self) -> dict:
        """Get frame statistics."""
        if not self._recent_stats:
            return {
                "frame_number": self._frame_number,
                "is_running": self._is_running,
                "avg_delta_ms": 0,
                "avg_duration_ms": 0,
                "max_duration_ms": 0,
            }

        deltas = [s.delta_ms for s in self._recent_stats]
        durations = [s.duration_ms for s in self._recent_stats]
        return {
            "frame_number": self._frame_number,
            "is_running": self._is_running,
            "avg_delta_ms": sum(deltas) / len(deltas),
            "avg_duration_ms": sum(durations) / len(durations),
            "max_duration_ms": max(durations),
        }
