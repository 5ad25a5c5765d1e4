"""Karaoke-style transcript highlighter."""

__version__ = "1.0.0"
