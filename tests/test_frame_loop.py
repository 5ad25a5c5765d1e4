"""Tests for the cooperative frame loop."""

import pytest

from karaoke.highlight.frame_loop import FrameLoop


def test_run_frame_runs_queued_callbacks(frames):
    calls = []
    frames.request_frame(lambda: calls.append("a"))
    frames(lambda: calls.append("b"))

    assert frames.has_pending
    assert frames.run_frame() == 2
    assert calls == ["a", "b"]
    assert not frames.has_pending
    assert frames.frame_count == 1


def test_callbacks_queued_during_frame_wait(frames):
    calls = []

    def rescheduling():
        calls.append(len(calls))
        frames.request_frame(rescheduling)

    frames.request_frame(rescheduling)

    frames.run_frame()
    frames.run_frame()

    assert calls == [0, 1]
    assert frames.has_pending


def test_clear(frames):
    frames.request_frame(lambda: None)
    frames.clear()

    assert not frames.has_pending
    assert frames.run_frame() == 0


def test_run_paces_frames(clock):
    loop = FrameLoop(fps=10, clock=clock, sleep=clock.sleep)
    remaining = [3]

    def tick():
        if remaining[0]:
            remaining[0] -= 1
            loop.request_frame(tick)

    loop.request_frame(tick)

    assert loop.run() == 4
    assert clock.sleeps == [pytest.approx(0.1)] * 3
    assert not loop.has_pending


def test_run_respects_max_frames(clock):
    loop = FrameLoop(fps=10, clock=clock, sleep=clock.sleep)

    def forever():
        loop.request_frame(forever)

    loop.request_frame(forever)

    assert loop.run(max_frames=5) == 5
    assert loop.has_pending


def test_run_does_not_sleep_after_stall(clock):
    loop = FrameLoop(fps=10, clock=clock, sleep=clock.sleep)

    def slow():
        clock.advance(0.5)

    loop.request_frame(slow)
    loop.request_frame(lambda: loop.request_frame(lambda: None))

    loop.run()

    assert clock.sleeps == []


def test_invalid_fps():
    with pytest.raises(ValueError):
        FrameLoop(fps=0)
