"""
Terminal Renderer

Draws the transcript in the terminal with rich, colouring each word by its
highlight state. It only mirrors what the PlaybackController reports and
never looks at the timing model beyond segment headers.
"""

from typing import Dict, List, Optional

from rich.console import Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from karaoke.highlight.playback import FrameUpdate
from karaoke.highlight.states import VisualState
from karaoke.highlight.timeline import Timeline, format_time
from karaoke.utils.config import config


class TerminalRenderer:
    """Renderable transcript view fed by FrameUpdates."""

    def __init__(self, timeline: Timeline, colors: Optional[Dict[str, str]] = None):
        """
        Initialize the renderer.

        Args:
            timeline: Timeline being played
            colors: Overrides for the ``colors`` config section
        """
        self.timeline = timeline
        self.colors = {
            "primary": config.color("primary"),
            "active_word": config.color("active_word"),
            "read_words": config.color("read_words"),
            "unread_words": config.color("unread_words"),
        }
        if colors:
            self.colors.update(colors)

        self.current_time = 0.0
        self.is_playing = False
        self.word_states: List[List[VisualState]] = [
            [VisualState.FUTURE] * len(segment.words) for segment in timeline.segments
        ]
        self.progress: List[float] = [0.0] * len(timeline.segments)
        self.frames_rendered = 0
        self._live: Optional[Live] = None

    def attach(self, live: Live) -> None:
        """Refresh ``live`` after every update."""
        self._live = live

    def render(self, update: FrameUpdate) -> None:
        self.current_time = update.current_time
        self.is_playing = update.is_playing
        for word in update.words:
            self.word_states[word.segment_index][word.word_index] = word.state
        for segment in update.segments:
            self.progress[segment.segment_index] = segment.progress
        self.frames_rendered += 1
        if self._live is not None:
            self._live.refresh()

    def style_for(self, state: VisualState) -> str:
        styles = {
            "highlight": f"bold {self.colors['active_word']}",
            "past": f"dim {self.colors['read_words']}",
            "future": self.colors["unread_words"],
        }
        return styles[state.group]

    def segment_text(self, segment_index: int) -> Text:
        segment = self.timeline.segments[segment_index]
        text = Text()
        for word in segment.words:
            if word.index:
                text.append(" ")
            text.append(word.text, style=self.style_for(self.word_states[segment_index][word.index]))
        return text

    def status_line(self) -> Text:
        marker = "▶" if self.is_playing else "⏸"
        return Text.assemble(
            (f"{marker} ", self.colors["primary"]),
            f"{format_time(self.current_time)} / {format_time(self.timeline.total_duration)}",
        )

    def __rich__(self) -> RenderableType:
        panels = []
        for segment in self.timeline.segments:
            body = Group(
                self.segment_text(segment.index),
                ProgressBar(
                    total=1.0,
                    completed=self.progress[segment.index],
                    complete_style=self.colors["primary"],
                ),
            )
            panels.append(Panel(
                body,
                title=f"{format_time(segment.start)} / {format_time(segment.end)}",
                subtitle=segment.speaker,
                title_align="left",
                subtitle_align="left",
            ))
        return Group(*panels, self.status_line())
