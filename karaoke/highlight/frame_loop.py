"""
Frame Loop Module

A cooperative, single-threaded "run on next frame" scheduler. Callbacks
queued with ``request_frame`` run on the following frame; a callback that
queues another one is deferred to the frame after that, so a self-scheduling
tick runs exactly once per frame.
"""

import time
from typing import Callable, List, Optional


FrameCallback = Callable[[], None]


class FrameLoop:
    """
    Frame scheduler with manual stepping and a paced run loop.

    Tests drive it one frame at a time with ``run_frame``; the CLI calls
    ``run`` which sleeps between frames to hold the target frame rate.
    """

    def __init__(
        self,
        fps: int = 60,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the frame loop.

        Args:
            fps: Target frames per second for ``run``
            clock: Monotonic time source in seconds
            sleep: Blocking sleep used to pace frames
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps!r}")
        self.fps = fps
        self.frame_interval = 1.0 / fps
        self._clock = clock
        self._sleep = sleep
        self._pending: List[FrameCallback] = []
        self.frame_count = 0

    def request_frame(self, callback: FrameCallback) -> None:
        """Queue ``callback`` for the next frame."""
        self._pending.append(callback)

    __call__ = request_frame

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def clear(self) -> None:
        """Drop every queued callback."""
        self._pending = []

    def run_frame(self) -> int:
        """
        Run the callbacks queued before this frame started.

        Returns:
            Number of callbacks run
        """
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback()
        self.frame_count += 1
        return len(callbacks)

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Run frames until nothing is pending.

        Args:
            max_frames: Stop after this many frames even if work remains

        Returns:
            Number of frames run
        """
        frames = 0
        next_frame = self._clock()

        while self._pending:
            if max_frames is not None and frames >= max_frames:
                break

            delay = next_frame - self._clock()
            if delay > 0:
                self._sleep(delay)

            self.run_frame()
            frames += 1
            next_frame += self.frame_interval

            # Don't try to catch up after a stall
            now = self._clock()
            if next_frame < now:
                next_frame = now

        return frames
