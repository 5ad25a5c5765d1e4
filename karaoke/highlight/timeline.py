"""
Timeline Module

Immutable timing data for a transcript: segments (one per speaker turn)
made of words, each with a half-open ``[start, end)`` span in seconds.
Supports JSON export so a built timeline can be inspected or reused.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

from karaoke.utils import logger


TIMING_MAP_VERSION = "1.0"


def format_time(seconds: float) -> str:
    """Format seconds as ``MM:SS``."""
    seconds = max(0.0, seconds)
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins:02d}:{secs:02d}"


@dataclass(frozen=True)
class Word:
    """A whitespace-delimited token and its reading span."""

    index: int  # Position within the segment
    text: str
    start: float  # Start time in seconds
    end: float  # End time in seconds
    char_count: int  # Non-whitespace characters

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "text": self.text,
            "start": round(self.start, 3),
            "end": round(self.end, 3),
            "chars": self.char_count,
        }


@dataclass(frozen=True)
class Segment:
    """The span covering one speaker turn."""

    index: int  # Position within the timeline
    speaker: str
    text: str
    start: float
    end: float
    words: Tuple[Word, ...] = ()

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "speaker": self.speaker,
            "text": self.text,
            "start": round(self.start, 3),
            "end": round(self.end, 3),
            "words": [w.to_dict() for w in self.words],
        }


@dataclass(frozen=True)
class Timeline:
    """Ordered, contiguous segments starting at time zero."""

    segments: Tuple[Segment, ...] = ()

    @property
    def total_duration(self) -> float:
        if not self.segments:
            return 0.0
        return self.segments[-1].end

    @property
    def word_count(self) -> int:
        return sum(len(s.words) for s in self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "version": TIMING_MAP_VERSION,
            "totalDuration": round(self.total_duration, 3),
            "segmentCount": len(self.segments),
            "segments": [s.to_dict() for s in self.segments],
        }

    def save(self, output_path: Path) -> Path:
        """Save timing map to JSON file."""
        output_path = Path(output_path).with_suffix(".json")
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        logger.success(f"Saved timing map: {output_path}")
        return output_path

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Timeline":
        try:
            segments = tuple(
                Segment(
                    index=seg_index,
                    speaker=seg_data["speaker"],
                    text=seg_data["text"],
                    start=float(seg_data["start"]),
                    end=float(seg_data["end"]),
                    words=tuple(
                        Word(
                            index=word_index,
                            text=w["text"],
                            start=float(w["start"]),
                            end=float(w["end"]),
                            char_count=int(w["chars"]),
                        )
                        for word_index, w in enumerate(seg_data.get("words", []))
                    ),
                )
                for seg_index, seg_data in enumerate(data.get("segments", []))
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Invalid timing map: {e!r}") from e

        return cls(segments=segments)

    @classmethod
    def load(cls, path: Path) -> "Timeline":
        """Load timing map from JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid timing map {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid timing map {path}: expected an object")
        return cls.from_dict(data)
