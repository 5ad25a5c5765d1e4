"""Tests for the reading rate model."""

import math

import pytest

from karaoke.highlight.rate import ConfigurationError, RateModel


def test_seconds_per_char():
    assert RateModel(1000).seconds_per_char() == pytest.approx(0.06)
    assert RateModel(60).seconds_per_char() == pytest.approx(1.0)


def test_duration_for_chars():
    assert RateModel(1000).duration_for(7) == pytest.approx(0.42)
    assert RateModel(1000).duration_for(0) == 0


@pytest.mark.parametrize("cpm", [0, -1, -0.5, math.inf, math.nan])
def test_invalid_rate_rejected(cpm):
    with pytest.raises(ConfigurationError):
        RateModel(cpm)


def test_non_numeric_rate_rejected():
    with pytest.raises(ConfigurationError):
        RateModel("fast")
    with pytest.raises(ConfigurationError):
        RateModel(True)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        RateModel(0)


def test_rate_is_immutable():
    rate = RateModel(1000)
    with pytest.raises(AttributeError):
        rate.characters_per_minute = 2000
