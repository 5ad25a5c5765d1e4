"""
State Resolver Module

Maps a word span and the current playback time to a visual state.
Everything here is pure: the same inputs always give the same state.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List

from karaoke.highlight.rate import ConfigurationError
from karaoke.highlight.timeline import Segment, Timeline, Word


class VisualState(str, Enum):
    """Per-word highlight state."""

    FUTURE = "future"
    TRANSITIONING_IN = "transitioning-in"
    ACTIVE = "active"
    TRANSITIONING_OUT = "transitioning-out"
    PAST = "past"

    @property
    def is_highlighted(self) -> bool:
        return self in (VisualState.TRANSITIONING_IN, VisualState.ACTIVE)

    @property
    def is_read(self) -> bool:
        return self in (VisualState.TRANSITIONING_OUT, VisualState.PAST)

    @property
    def group(self) -> str:
        """Coarse colour group: ``future``, ``highlight`` or ``past``."""
        if self.is_highlighted:
            return "highlight"
        if self.is_read:
            return "past"
        return "future"


@dataclass(frozen=True)
class TransitionWindows:
    """Lead-in and trailing transition lengths in seconds."""

    in_window: float = 0.0
    out_window: float = 0.0

    def __post_init__(self):
        for value in (self.in_window, self.out_window):
            if math.isfinite(value) and value >= 0:
                continue
            raise ConfigurationError(
                f"Transition windows must be finite and non-negative, got "
                f"in={self.in_window!r} out={self.out_window!r}"
            )


def resolve_word_state(
    word: Word,
    current_time: float,
    in_window: float = 0.0,
    out_window: float = 0.0,
) -> VisualState:
    """
    Resolve a word's state at ``current_time``.

    Intervals are half-open and checked in order, first match wins:
    future, transitioning in, active, transitioning out, past.
    """
    if current_time < word.start - in_window:
        return VisualState.FUTURE
    if current_time < word.start:
        return VisualState.TRANSITIONING_IN
    if current_time < word.end:
        return VisualState.ACTIVE
    if current_time < word.end + out_window:
        return VisualState.TRANSITIONING_OUT
    return VisualState.PAST


def segment_progress(segment: Segment, current_time: float) -> float:
    """Fraction of the segment elapsed, clamped to ``[0, 1]``."""
    if segment.duration <= 0:
        # Zero-length segments count as read once time has moved past them
        return 1.0 if current_time > segment.start else 0.0
    fraction = (current_time - segment.start) / segment.duration
    return max(0.0, min(1.0, fraction))


def resolve_timeline(
    timeline: Timeline,
    current_time: float,
    windows: TransitionWindows = TransitionWindows(),
) -> List[List[VisualState]]:
    """Resolve every word, indexed as ``[segment_index][word_index]``."""
    return [
        [
            resolve_word_state(word, current_time, windows.in_window, windows.out_window)
            for word in segment.words
        ]
        for segment in timeline.segments
    ]
