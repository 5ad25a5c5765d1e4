"""Shared test fixtures for karaoke tests."""

import pytest

from karaoke.highlight.frame_loop import FrameLoop
from karaoke.highlight.playback import PlaybackController
from karaoke.highlight.rate import RateModel
from karaoke.highlight.scheduler import Turn, build_timeline
from karaoke.highlight.states import TransitionWindows


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class RecordingRenderer:
    """Keeps every FrameUpdate it receives."""

    def __init__(self):
        self.updates = []

    def render(self, update):
        self.updates.append(update)

    @property
    def last(self):
        return self.updates[-1]


# 1000 chars/min -> 0.06s per char
# "Hi there": Hi [0, 0.12), there [0.12, 0.42)
# "How are you": How [0.42, 0.60), are [0.60, 0.78), you [0.78, 0.96)
TURNS = [
    Turn(speaker="A", text="Hi there"),
    Turn(speaker="B", text="How are you"),
]


@pytest.fixture()
def rate():
    return RateModel(1000)


@pytest.fixture()
def timeline(rate):
    return build_timeline(TURNS, rate)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def frames(clock):
    return FrameLoop(fps=60, clock=clock, sleep=clock.sleep)


@pytest.fixture()
def renderer():
    return RecordingRenderer()


@pytest.fixture()
def make_controller(timeline, renderer, clock, frames):
    """Build a controller on the shared timeline, fake clock and frame loop."""

    def _make(windows=None, tl=None):
        return PlaybackController(
            tl if tl is not None else timeline,
            renderer=renderer,
            windows=windows or TransitionWindows(),
            clock=clock,
            schedule=frames.request_frame,
        )

    return _make


@pytest.fixture()
def controller(make_controller):
    return make_controller()
