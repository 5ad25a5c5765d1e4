#!/usr/bin/env python3
"""
Karaoke Highlighter - Main CLI

Builds a reading-speed timeline from a transcript of speaker turns and
plays it back in the terminal with word-by-word highlighting.

Features:
- Timing derived from text length and a characters-per-minute rate
- Per-word states with lead-in and fade-out transition windows
- JSON timing map export, and playback of exported maps
- Live terminal playback
"""

import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.live import Live

from karaoke import __version__
from karaoke.highlight.frame_loop import FrameLoop
from karaoke.highlight.playback import PlaybackController
from karaoke.highlight.rate import ConfigurationError, RateModel
from karaoke.highlight.scheduler import Turn, build_timeline, load_turns
from karaoke.highlight.states import TransitionWindows
from karaoke.highlight.terminal_renderer import TerminalRenderer
from karaoke.highlight.timeline import Timeline, format_time
from karaoke.utils import logger
from karaoke.utils.config import config


def _is_timing_map(path: Path) -> bool:
    """True for an exported timing map rather than a transcript."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError:
        return False
    return isinstance(data, dict) and "segments" in data


def _load_timeline(input_file: str, cpm: Optional[float]) -> Timeline:
    """
    Load a timeline, exiting on bad input.

    Exported timing maps are used as-is; transcripts are scheduled at
    ``cpm`` (or the configured rate).
    """
    path = Path(input_file)
    try:
        if _is_timing_map(path):
            if cpm is not None:
                logger.warning("--cpm is ignored for a timing map")
            return Timeline.load(path)
        turns: List[Turn] = load_turns(path)
        rate = RateModel(cpm if cpm is not None else config.characters_per_minute)
    except (ConfigurationError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)
    return build_timeline(turns, rate)


cpm_option = click.option(
    "--cpm",
    type=float,
    default=None,
    help=f"Reading rate in characters per minute (default: {config.characters_per_minute:g})",
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", is_flag=True, help="Show debug output")
def cli(verbose: bool):
    """
    Karaoke Highlighter

    Turn a transcript into a timed, word-by-word highlighted reading.
    """
    logger.set_verbose(verbose)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True))
@cpm_option
@click.option("--words", is_flag=True, help="List every word with its span")
def timeline(input_file: str, cpm: Optional[float], words: bool):
    """
    Show the computed timeline for a transcript.
    """
    result = _load_timeline(input_file, cpm)

    logger.header(f"Timeline: {Path(input_file).name}")

    for segment in result.segments:
        logger.console.print(
            f"  {segment.index:3}. [{format_time(segment.start)} - {format_time(segment.end)}] "
            f"{segment.speaker:<15} ({len(segment.words):,} words, {segment.duration:.2f}s)"
        )
        if words:
            for word in segment.words:
                logger.console.print(
                    f"         {word.start:8.3f} - {word.end:8.3f}  {word.text}"
                )

    logger.console.print()
    logger.info(f"Segments: {len(result)}")
    logger.info(f"Words: {result.word_count:,}")
    logger.info(f"Duration: {result.total_duration:.2f}s ({format_time(result.total_duration)})")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "-o", "--output",
    type=click.Path(),
    help="Output JSON path (default: output/<input>_timing.json)",
)
@cpm_option
def export(input_file: str, output: Optional[str], cpm: Optional[float]):
    """
    Export the timing map of a transcript as JSON.
    """
    input_path = Path(input_file)
    result = _load_timeline(input_file, cpm)

    if output:
        output_path = Path(output)
    else:
        output_path = config.get_path("output") / f"{input_path.stem}_timing.json"

    result.save(output_path)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True))
@cpm_option
@click.option("--start", type=float, default=0.0, help="Start position in seconds")
@click.option(
    "--start-word",
    type=int,
    nargs=2,
    default=None,
    metavar="SEGMENT WORD",
    help="Start at a word, by segment and word index",
)
@click.option("--fps", type=int, default=None, help=f"Frame rate (default: {config.fps})")
@click.option("--in-window", type=float, default=None, help="Lead-in transition in seconds")
@click.option("--out-window", type=float, default=None, help="Fade-out transition in seconds")
def play(
    input_file: str,
    cpm: Optional[float],
    start: float,
    start_word: Optional[Tuple[int, int]],
    fps: Optional[int],
    in_window: Optional[float],
    out_window: Optional[float],
):
    """
    Play a transcript or timing map in the terminal with word highlighting.

    Press Ctrl+C to stop.
    """
    result = _load_timeline(input_file, cpm)

    try:
        windows = TransitionWindows(
            in_window=config.in_window if in_window is None else in_window,
            out_window=config.out_window if out_window is None else out_window,
        )
        frame_loop = FrameLoop(fps=fps or config.fps)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    view = TerminalRenderer(result)
    controller = PlaybackController(
        result,
        renderer=view,
        windows=windows,
        schedule=frame_loop.request_frame,
    )

    try:
        if start_word:
            controller.seek_to_word(*start_word)
        else:
            controller.seek(start)
    except IndexError:
        logger.error(f"No word {start_word[0]}:{start_word[1]} in {Path(input_file).name}")
        sys.exit(1)

    logger.header(f"Playing: {Path(input_file).name}")

    with Live(view, console=logger.console, auto_refresh=False) as live:
        view.attach(live)
        controller.play()
        try:
            frame_loop.run()
        except KeyboardInterrupt:
            controller.pause()
            live.refresh()
            logger.warning(f"Stopped at {format_time(controller.current_time)}")
            return

    logger.success(f"Finished: {format_time(result.total_duration)}")


@cli.command()
def info():
    """
    Show configuration.
    """
    logger.header("Karaoke Highlighter")

    logger.console.print("[bold]Paths:[/bold]")
    logger.console.print(f"  Project root: {config.project_root}")
    logger.console.print(f"  Output:       {config.get_path('output')}")

    logger.console.print("\n[bold]Timing:[/bold]")
    logger.console.print(f"  Reading rate:  {config.characters_per_minute:g} chars/min")
    logger.console.print(f"  Lead-in:       {config.in_window:g}s")
    logger.console.print(f"  Fade-out:      {config.out_window:g}s")
    logger.console.print(f"  Frame rate:    {config.fps} fps")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
