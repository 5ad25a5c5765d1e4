"""
Rich logging utilities for the karaoke highlighter.
"""

from rich.console import Console
from rich.theme import Theme

# Custom theme for the highlighter
custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "debug": "dim",
    }
)

# Global console instance
console = Console(theme=custom_theme)

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable debug output."""
    global _verbose
    _verbose = enabled


def debug(message: str) -> None:
    """Print a debug message when verbose output is enabled."""
    if _verbose:
        console.print(f"[debug]· {message}[/debug]")


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]ℹ[/info] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓[/success] {message}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[warning]⚠[/warning] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗[/error] {message}")


def header(message: str) -> None:
    """Print a header message."""
    console.print()
    console.rule(f"[bold]{message}[/bold]")
    console.print()
