from datetime import datetime, timedelta

import pytest

from focus_bean.errors import InvalidSession
from focus_bean.models import TimerMode, TimerSession

START = datetime(2026, 1, 7, 10, 30, 45)
END = START + timedelta(minutes=25)


def test_factories():
    w = TimerSession.completed_work(START, END, 25)
    assert w.kind is TimerMode.WORK and w.completed and w.is_work_session
    b = TimerSession.completed_break(START, END, 5)
    assert b.kind is TimerMode.BREAK and b.completed and b.is_break_session
    i = TimerSession.interrupted(START, END, TimerMode.WORK, 25)
    assert i.kind is TimerMode.WORK and not i.completed
    assert not i.counts_toward_goal


@pytest.mark.parametrize("minutes", [0, -1])
def test_non_positive_duration_rejected(minutes):
    with pytest.raises(InvalidSession):
        TimerSession.completed_work(START, END, minutes)


@pytest.mark.parametrize("kind", [TimerMode.IDLE, TimerMode.PAUSED, "WORK"])
def test_wrong_kind_rejected(kind):
    with pytest.raises(InvalidSession):
        TimerSession.interrupted(START, END, kind, 25)  # type: ignore[arg-type]


def test_end_before_start_rejected():
    with pytest.raises(InvalidSession):
        TimerSession.completed_break(END, START, 5)


def test_zero_length_interval_allowed():
    s = TimerSession.interrupted(START, START, TimerMode.BREAK, 5)
    assert s.start_time == s.end_time


def test_immutable():
    s = TimerSession.completed_work(START, END, 25)
    with pytest.raises(AttributeError):
        s.completed = False  # type: ignore[misc]


def test_dict_uses_local_iso_timestamps():
    data = TimerSession.completed_work(START, END, 25).to_dict()
    assert data == {
        "startTime": "2026-01-07T10:30:45",
        "endTime": "2026-01-07T10:55:45",
        "type": "WORK",
        "durationMinutes": 25,
        "completed": True,
    }
    assert TimerSession.from_dict(data) == TimerSession.completed_work(START, END, 25)


def test_from_dict_rejects_offset_timestamps():
    data = TimerSession.completed_work(START, END, 25).to_dict()
    data["startTime"] = "2026-01-07T10:30:45+02:00"
    with pytest.raises(ValueError):
        TimerSession.from_dict(data)


def test_mode_helpers():
    assert TimerMode.WORK.opposite() is TimerMode.BREAK
    assert TimerMode.BREAK.opposite() is TimerMode.WORK
    with pytest.raises(ValueError):
        TimerMode.IDLE.opposite()
    assert TimerMode.WORK.is_running and not TimerMode.PAUSED.is_running
    assert TimerMode.IDLE.display_name == "Ready"
