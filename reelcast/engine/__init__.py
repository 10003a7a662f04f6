"""Frame scheduling for the game loop."""

from reelcast.engine.scheduler import FrameScheduler, FrameStats

__all__ = ["FrameScheduler", "FrameStats"]
