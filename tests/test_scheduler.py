"""Tests for building timelines from speaker turns."""

import json

import pytest

from karaoke.highlight.rate import ConfigurationError, RateModel
from karaoke.highlight.scheduler import Turn, build_timeline, count_chars, load_turns


SCRIPT = [
    {"speaker": "Speaker 1", "text": "Howdy, I'm Chris, an engineer on the AVFoundation team."},
    {"speaker": "Speaker 2", "text": "When considering the content pipeline, we start with encoding video."},
    {"speaker": "Speaker 2", "text": "   "},
    {"speaker": "Speaker 1", "text": "For more details,\tsee the\n\nHTTP Live Streaming page."},
]


def test_hi_there_scenario(rate):
    timeline = build_timeline([Turn("A", "Hi there")], rate)

    segment = timeline.segments[0]
    assert segment.speaker == "A"
    assert segment.start == 0
    assert segment.duration == pytest.approx(0.42)

    hi, there = segment.words
    assert (hi.text, hi.char_count) == ("Hi", 2)
    assert hi.start == 0
    assert hi.end == pytest.approx(0.12)
    assert (there.text, there.char_count) == ("there", 5)
    assert there.start == pytest.approx(0.12)
    assert there.end == pytest.approx(0.42)
    assert timeline.total_duration == pytest.approx(0.42)


@pytest.mark.parametrize("cpm", [1000, 333.3, 17])
def test_segments_are_contiguous(cpm):
    timeline = build_timeline(SCRIPT, RateModel(cpm))

    assert timeline.segments[0].start == 0
    for prev, nxt in zip(timeline.segments, timeline.segments[1:]):
        assert nxt.start == prev.end
    assert timeline.total_duration == timeline.segments[-1].end


@pytest.mark.parametrize("cpm", [1000, 333.3, 17])
def test_words_cover_segment(cpm):
    timeline = build_timeline(SCRIPT, RateModel(cpm))

    for segment in timeline.segments:
        if not segment.words:
            continue
        assert segment.words[0].start == segment.start
        assert segment.words[-1].end == segment.end
        for prev, nxt in zip(segment.words, segment.words[1:]):
            assert nxt.start == prev.end
        for word in segment.words:
            assert word.end >= word.start


def test_duration_formula():
    rate = RateModel(450)
    timeline = build_timeline(SCRIPT, rate)

    for turn, segment in zip(SCRIPT, timeline.segments):
        chars = count_chars(turn["text"])
        assert segment.duration == pytest.approx(chars * 60 / 450)
        for word in segment.words:
            assert word.duration == pytest.approx(word.char_count * rate.seconds_per_char())


def test_words_split_on_whitespace_runs(rate):
    timeline = build_timeline(SCRIPT, rate)

    words = [w.text for w in timeline.segments[3].words]
    assert words == ["For", "more", "details,", "see", "the", "HTTP", "Live", "Streaming", "page."]
    assert [w.index for w in timeline.segments[3].words] == list(range(9))


def test_blank_turn_is_zero_length(rate):
    timeline = build_timeline(SCRIPT, rate)

    blank = timeline.segments[2]
    assert blank.words == ()
    assert blank.duration == 0
    assert blank.start == timeline.segments[1].end
    assert timeline.segments[3].start == blank.end


def test_empty_text_does_not_raise(rate):
    timeline = build_timeline([Turn("A", "")], rate)

    assert len(timeline) == 1
    assert timeline.segments[0].words == ()
    assert timeline.total_duration == 0


def test_empty_turns(rate):
    timeline = build_timeline([], rate)

    assert timeline.segments == ()
    assert timeline.total_duration == 0
    assert timeline.word_count == 0


def test_segment_indices(rate):
    timeline = build_timeline(SCRIPT, rate)
    assert [s.index for s in timeline.segments] == [0, 1, 2, 3]


def test_invalid_rate_fails_before_scheduling():
    with pytest.raises(ConfigurationError):
        build_timeline(SCRIPT, RateModel(0))


def test_turn_missing_text(rate):
    with pytest.raises(ValueError, match="Turn 1 is missing 'text'"):
        build_timeline([{"speaker": "A", "text": "ok"}, {"speaker": "B"}], rate)


def test_turn_must_be_mapping(rate):
    with pytest.raises(ValueError, match="Turn 0"):
        build_timeline(["just text"], rate)


def test_words_in_reading_order(rate):
    timeline = build_timeline([Turn("A", "one two"), Turn("B", "three")], rate)
    assert [w.text for s in timeline for w in s.words] == ["one", "two", "three"]


class TestLoadTurns:

    def test_list_form(self, tmp_path):
        path = tmp_path / "script.json"
        path.write_text(json.dumps(SCRIPT), encoding="utf-8")

        turns = load_turns(path)

        assert len(turns) == 4
        assert turns[0] == Turn("Speaker 1", SCRIPT[0]["text"])

    def test_object_form(self, tmp_path):
        path = tmp_path / "script.json"
        path.write_text(json.dumps({"turns": SCRIPT[:2]}), encoding="utf-8")

        assert [t.speaker for t in load_turns(path)] == ["Speaker 1", "Speaker 2"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "script.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid transcript"):
            load_turns(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "script.json"
        path.write_text(json.dumps({"speaker": "A"}), encoding="utf-8")

        with pytest.raises(ValueError, match="expected a list"):
            load_turns(path)
