"""
Configuration loader for the karaoke highlighter.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_ENV_VAR = "KARAOKE_CONFIG"


class Config:
    """Configuration manager for timing and playback settings."""

    _instance: Optional["Config"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not self._config:
            self._load_config()

    def _get_project_root(self) -> Path:
        """Get the project root directory."""
        # Navigate up from karaoke/utils to project root
        current = Path(__file__).resolve()
        return current.parent.parent.parent

    def _config_path(self) -> Path:
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override)
        return self._get_project_root() / "config" / "settings.yaml"

    def _load_config(self, path: Optional[Path] = None) -> None:
        """Load configuration from YAML file, layered over the defaults."""
        config_path = Path(path) if path else self._config_path()
        loaded: Dict[str, Any] = {}

        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file must contain a mapping: {config_path}")

        self._config = _merge(self._get_defaults(), loaded)

    def reload(self, path: Optional[Path] = None) -> None:
        """Re-read settings, optionally from an explicit file."""
        self._load_config(path)

    def _get_defaults(self) -> Dict[str, Any]:
        """Return default configuration."""
        return {
            "speed": {
                "characters_per_minute": 1000,
            },
            "transitions": {
                "in_window": 0.05,
                "out_window": 0.6,
            },
            "playback": {
                "fps": 60,
            },
            "colors": {
                "primary": "#5B53FF",
                "active_word": "#7E85FF",
                "read_words": "#D4D6E6",
                "unread_words": "#F3F3F7",
            },
            "paths": {
                "output": "output",
            },
        }

    def get(self, *keys: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Example:
            config.get("speed", "characters_per_minute") -> 1000
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
            if value is None:
                return default
        return value

    def get_path(self, key: str) -> Path:
        """Get a path configuration as absolute Path."""
        relative_path = self.get("paths", key, default=key)
        return self._get_project_root() / relative_path

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        return self._get_project_root()

    @property
    def characters_per_minute(self) -> float:
        """Get the reading rate."""
        return float(self.get("speed", "characters_per_minute", default=1000))

    @property
    def in_window(self) -> float:
        """Get the lead-in transition window in seconds."""
        return float(self.get("transitions", "in_window", default=0.05))

    @property
    def out_window(self) -> float:
        """Get the trailing transition window in seconds."""
        return float(self.get("transitions", "out_window", default=0.6))

    @property
    def fps(self) -> int:
        """Get the playback frame rate."""
        return int(self.get("playback", "fps", default=60))

    def color(self, name: str) -> str:
        return self.get("colors", name, default="white")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# Singleton instance
config = Config()
