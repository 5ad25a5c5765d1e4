"""
Reading Rate Module

Converts a characters-per-minute reading speed into seconds per character.
"""

import math
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when a timing setting is outside its valid range."""


@dataclass(frozen=True)
class RateModel:
    """Reading rate in characters per minute."""

    characters_per_minute: float

    def __post_init__(self):
        cpm = self.characters_per_minute
        if isinstance(cpm, bool) or not isinstance(cpm, (int, float)):
            raise ConfigurationError(
                f"characters_per_minute must be a number, got {cpm!r}"
            )
        if not math.isfinite(cpm) or cpm <= 0:
            raise ConfigurationError(
                f"characters_per_minute must be positive, got {cpm!r}"
            )

    def seconds_per_char(self) -> float:
        return 60 / self.characters_per_minute

    def duration_for(self, char_count: int) -> float:
        """Seconds needed to read ``char_count`` characters."""
        return char_count * self.seconds_per_char()
