"""
Highlight Module

Reading-speed timing model and simulated playback for karaoke-style
word highlighting.
"""

from karaoke.highlight.rate import ConfigurationError, RateModel
from karaoke.highlight.timeline import Segment, Timeline, Word, format_time
from karaoke.highlight.scheduler import Turn, build_timeline, load_turns
from karaoke.highlight.states import (
    TransitionWindows,
    VisualState,
    resolve_timeline,
    resolve_word_state,
    segment_progress,
)
from karaoke.highlight.frame_loop import FrameLoop
from karaoke.highlight.playback import (
    FrameUpdate,
    PlaybackController,
    PlaybackState,
    SegmentUpdate,
    WordUpdate,
)

__all__ = [
    "ConfigurationError",
    "RateModel",
    "Segment",
    "Timeline",
    "Word",
    "format_time",
    "Turn",
    "build_timeline",
    "load_turns",
    "TransitionWindows",
    "VisualState",
    "resolve_timeline",
    "resolve_word_state",
    "segment_progress",
    "FrameLoop",
    "FrameUpdate",
    "PlaybackController",
    "PlaybackState",
    "SegmentUpdate",
    "WordUpdate",
]
