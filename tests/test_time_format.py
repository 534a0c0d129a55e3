import pytest

from focus_bean.time_format import (
    format_minutes,
    format_seconds,
    format_seconds_readable,
    minutes_to_seconds,
    seconds_to_minutes,
)


def test_format_seconds():
    assert format_seconds(0) == "00:00"
    assert format_seconds(59) == "00:59"
    assert format_seconds(25 * 60) == "25:00"
    assert format_seconds(90 * 60 + 5) == "90:05"


def test_format_seconds_readable():
    assert format_seconds_readable(125) == "2 min 5 sec"


def test_conversions():
    assert minutes_to_seconds(25) == 1500
    assert seconds_to_minutes(1559) == 25


def test_format_minutes_plural():
    assert format_minutes(1) == "1 minute"
    assert format_minutes(0) == "0 minutes"
    assert format_minutes(45) == "45 minutes"


@pytest.mark.parametrize(
    "fn", [format_seconds, format_seconds_readable, minutes_to_seconds, seconds_to_minutes, format_minutes]
)
def test_negative_rejected(fn):
    with pytest.raises(ValueError):
        fn(-1)
