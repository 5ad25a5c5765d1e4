"""
Playback Controller Module

Simulates a media transport (play, pause, seek, reset) over a Timeline using
a wall clock, and drives a per-frame tick loop that re-resolves word states
and forwards what changed to a renderer.

There is no media underneath: "playing" only means the simulated time is
advancing with the clock.
"""

import math
import time
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Protocol, Tuple

from karaoke.highlight.frame_loop import FrameLoop
from karaoke.highlight.states import (
    TransitionWindows,
    VisualState,
    resolve_timeline,
    resolve_word_state,
    segment_progress,
)
from karaoke.highlight.timeline import Timeline
from karaoke.utils import logger


@dataclass
class PlaybackState:
    """Mutable transport state, owned by a single PlaybackController."""

    current_time: float = 0.0
    is_playing: bool = False
    paused_at: float = 0.0
    wall_clock_anchor: Optional[float] = None


@dataclass(frozen=True)
class WordUpdate:
    """A word whose visual state should be (re)applied."""

    segment_index: int
    word_index: int
    state: VisualState
    animate: bool  # False means apply instantly


@dataclass(frozen=True)
class SegmentUpdate:
    """A segment whose progress should be (re)applied."""

    segment_index: int
    progress: float
    is_complete: bool


@dataclass(frozen=True)
class FrameUpdate:
    """Everything a renderer needs for one recompute."""

    current_time: float
    is_playing: bool
    words: Tuple[WordUpdate, ...] = ()
    segments: Tuple[SegmentUpdate, ...] = ()


class Renderer(Protocol):
    def render(self, update: FrameUpdate) -> None:
        ...


Clock = Callable[[], float]
ScheduleFrame = Callable[[Callable[[], None]], None]


class PlaybackController:
    """
    Transport state machine with two states, Paused (initial) and Playing.

    Every operation is safe to call in any state: calls that make no sense
    (pausing while paused, playing while playing) are no-ops, and seek
    targets outside the timeline are clamped.

    Each queued tick carries the generation it was scheduled in. Pause, seek
    and reset bump the generation, so a tick that was already queued finds
    itself stale and returns without touching anything.

    Not thread-safe; callers on several threads must serialize access.
    """

    def __init__(
        self,
        timeline: Timeline,
        renderer: Optional[Renderer] = None,
        windows: Optional[TransitionWindows] = None,
        clock: Clock = time.monotonic,
        schedule: Optional[ScheduleFrame] = None,
    ):
        """
        Initialize the controller.

        Args:
            timeline: Timeline to play through
            renderer: Receives a FrameUpdate per recompute
            windows: Transition window lengths
            clock: Monotonic time source in seconds
            schedule: "Run on next frame" primitive; a FrameLoop is
                created (and exposed as ``frame_loop``) when omitted
        """
        self.timeline = timeline
        self.renderer = renderer
        self.windows = windows or TransitionWindows()
        self._clock = clock

        self.frame_loop: Optional[FrameLoop] = None
        if schedule is None:
            self.frame_loop = FrameLoop()
            schedule = self.frame_loop.request_frame
        self._schedule = schedule

        self._state = PlaybackState()
        self._generation = 0
        self._word_states: List[List[VisualState]] = [
            [VisualState.FUTURE] * len(segment.words) for segment in timeline.segments
        ]
        self._progress: List[float] = [0.0] * len(timeline.segments)

    # Accessors

    @property
    def current_time(self) -> float:
        return self._state.current_time

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def total_duration(self) -> float:
        return self.timeline.total_duration

    @property
    def state(self) -> PlaybackState:
        """Snapshot of the transport state."""
        return replace(self._state)

    def word_state(self, segment_index: int, word_index: int) -> VisualState:
        """Last state reported for a word."""
        return self._word_states[segment_index][word_index]

    def segment_progress(self, segment_index: int) -> float:
        """Last progress reported for a segment."""
        return self._progress[segment_index]

    # Transport

    def play(self) -> None:
        if self._state.is_playing:
            return

        self._state.wall_clock_anchor = self._clock() - self._state.paused_at
        self._state.is_playing = True
        logger.debug(f"Play from {self._state.paused_at:.3f}s")
        self._schedule_tick()

    def pause(self) -> None:
        if not self._state.is_playing:
            return

        self._state.paused_at = self._state.current_time
        self._state.is_playing = False
        self._generation += 1
        logger.debug(f"Pause at {self._state.paused_at:.3f}s")

    def toggle(self) -> bool:
        """Pause if playing, play otherwise. Returns the new playing flag."""
        if self._state.is_playing:
            self.pause()
        else:
            self.play()
        return self._state.is_playing

    def seek(self, target_time: float) -> None:
        """
        Jump to ``target_time``, clamped to the timeline.

        All words are re-resolved and applied instantly, since the jump may
        cross many boundaries whose intermediate states shouldn't animate.
        Playback resumes if it was running before the seek.
        """
        target = self._clamp(target_time)
        was_playing = self._state.is_playing

        self.pause()
        self._generation += 1
        self._state.current_time = self._state.paused_at = target
        logger.debug(f"Seek to {target:.3f}s")
        self.refresh()

        if was_playing:
            self.play()

    def reset(self) -> None:
        """Stop at time zero with every word unread."""
        self.pause()
        self.seek(0.0)
        self._generation += 1
        # A lead-in window would otherwise leave the opening words highlighted
        self._force_all(VisualState.FUTURE, 0.0)
        logger.debug("Reset")

    def seek_to_word(self, segment_index: int, word_index: int) -> None:
        """Seek to the start of a word, as when the reader clicks it."""
        if segment_index < 0 or word_index < 0:
            raise IndexError(f"No word at {segment_index}:{word_index}")
        word = self.timeline.segments[segment_index].words[word_index]
        self.seek(word.start)

    def refresh(self) -> None:
        """Re-resolve every word at the current time and apply instantly."""
        current_time = self._state.current_time
        self._word_states = resolve_timeline(self.timeline, current_time, self.windows)
        self._progress = [
            segment_progress(segment, current_time) for segment in self.timeline.segments
        ]
        self._emit_all()

    # Tick loop

    def _schedule_tick(self) -> None:
        generation = self._generation
        self._schedule(lambda: self._tick(generation))

    def _tick(self, generation: int) -> None:
        if not self._state.is_playing or generation != self._generation:
            return

        elapsed = self._clock() - self._state.wall_clock_anchor
        total = self.total_duration

        if elapsed >= total:
            self._state.current_time = total
            self._force_all(VisualState.PAST, 1.0)
            if generation != self._generation:
                return
            self.pause()
            # Rewind so the next play starts from the beginning
            self._state.paused_at = 0.0
            logger.debug("Playback complete")
            return

        self._state.current_time = elapsed
        self._emit_changes()
        # The renderer may have paused or seeked, which queues its own tick
        if self._state.is_playing and generation == self._generation:
            self._schedule_tick()

    # Emission

    def _emit_changes(self) -> None:
        current_time = self._state.current_time
        word_updates = []
        segment_updates = []

        for segment in self.timeline.segments:
            progress = segment_progress(segment, current_time)
            if progress != self._progress[segment.index]:
                self._progress[segment.index] = progress
                segment_updates.append(
                    SegmentUpdate(segment.index, progress, progress >= 1.0)
                )

            states = self._word_states[segment.index]
            for word in segment.words:
                new_state = resolve_word_state(
                    word, current_time, self.windows.in_window, self.windows.out_window
                )
                if new_state != states[word.index]:
                    states[word.index] = new_state
                    word_updates.append(
                        WordUpdate(segment.index, word.index, new_state, animate=True)
                    )

        self._emit(FrameUpdate(
            current_time=current_time,
            is_playing=True,
            words=tuple(word_updates),
            segments=tuple(segment_updates),
        ))

    def _force_all(self, state: VisualState, progress: float) -> None:
        for segment in self.timeline.segments:
            self._progress[segment.index] = progress
            states = self._word_states[segment.index]
            for i in range(len(states)):
                states[i] = state
        self._emit_all()

    def _emit_all(self) -> None:
        word_updates = tuple(
            WordUpdate(seg_index, word_index, state, animate=False)
            for seg_index, states in enumerate(self._word_states)
            for word_index, state in enumerate(states)
        )
        segment_updates = tuple(
            SegmentUpdate(seg_index, progress, progress >= 1.0)
            for seg_index, progress in enumerate(self._progress)
        )
        self._emit(FrameUpdate(
            current_time=self._state.current_time,
            is_playing=False,
            words=word_updates,
            segments=segment_updates,
        ))

    def _emit(self, update: FrameUpdate) -> None:
        if self.renderer is not None:
            self.renderer.render(update)

    def _clamp(self, target_time: float) -> float:
        target = float(target_time)
        if math.isnan(target):
            return 0.0
        return max(0.0, min(target, self.total_duration))
