"""
Script Scheduler Module

Turns an ordered list of speaker turns into a Timeline. Each turn becomes a
segment whose length is proportional to its non-whitespace character count;
each word inside it gets a span proportional to its own characters.

Whitespace carries no reading time: words are split on whitespace runs and
laid end to end, so consecutive word spans touch with no gap.
"""

import json
from dataclasses import dataclass
from itertools import accumulate
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Union

from karaoke.highlight.rate import RateModel
from karaoke.highlight.timeline import Segment, Timeline, Word
from karaoke.utils import logger


@dataclass(frozen=True)
class Turn:
    """One speaker's contiguous block of source text."""

    speaker: str
    text: str


TurnLike = Union[Turn, Mapping[str, Any]]


def count_chars(text: str) -> int:
    """Count non-whitespace characters."""
    return sum(1 for ch in text if not ch.isspace())


def build_segment(index: int, turn: Turn, start: float, rate: RateModel) -> Segment:
    """
    Build one segment starting at ``start``.

    Word boundaries are a prefix sum over word character counts, so the
    last word always ends exactly where the segment does.
    """
    tokens = turn.text.split()
    counts = [count_chars(token) for token in tokens]
    boundaries = [0] + list(accumulate(counts))

    words = tuple(
        Word(
            index=i,
            text=token,
            start=start + rate.duration_for(boundaries[i]),
            end=start + rate.duration_for(boundaries[i + 1]),
            char_count=counts[i],
        )
        for i, token in enumerate(tokens)
    )

    total_chars = boundaries[-1]
    return Segment(
        index=index,
        speaker=turn.speaker,
        text=turn.text,
        start=start,
        end=start + rate.duration_for(total_chars),
        words=words,
    )


def build_timeline(turns: Iterable[TurnLike], rate: RateModel) -> Timeline:
    """
    Build a contiguous timeline from speaker turns.

    Args:
        turns: Turns in reading order (Turn objects or speaker/text mappings)
        rate: Reading rate

    Returns:
        Timeline starting at time zero
    """
    segments: List[Segment] = []
    cursor = 0.0

    for index, turn in enumerate(turns):
        segment = build_segment(index, _coerce_turn(turn, index), cursor, rate)
        segments.append(segment)
        cursor = segment.end

    timeline = Timeline(segments=tuple(segments))
    logger.debug(
        f"Built timeline: {len(timeline)} segments, "
        f"{timeline.word_count} words, {timeline.total_duration:.2f}s"
    )
    return timeline


def _coerce_turn(turn: TurnLike, index: int) -> Turn:
    if isinstance(turn, Turn):
        return turn
    if not isinstance(turn, Mapping):
        raise ValueError(f"Turn {index} must be a mapping, got {type(turn).__name__}")
    try:
        speaker = turn["speaker"]
        text = turn["text"]
    except KeyError as e:
        raise ValueError(f"Turn {index} is missing {e.args[0]!r}") from e
    return Turn(speaker=str(speaker), text=str(text) if text is not None else "")


def load_turns(path: Path) -> List[Turn]:
    """
    Load speaker turns from a JSON transcript.

    Accepts either a list of ``{"speaker", "text"}`` objects or an object
    with a ``"turns"`` list.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid transcript {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("turns")
    if not isinstance(data, list):
        raise ValueError(f"Invalid transcript {path}: expected a list of turns")

    return [_coerce_turn(item, i) for i, item in enumerate(data)]
