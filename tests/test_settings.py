import pytest

from focus_bean.errors import InvalidDuration
from focus_bean.models import HistoryViewMode, NotificationSound
from focus_bean.settings import UserSettings


def test_defaults():
    s = UserSettings()
    assert (s.work_minutes, s.break_minutes, s.daily_goal_minutes) == (25, 5, 25)
    assert s.history_chart_days == 7
    assert s.notification_sound is NotificationSound.CHIME
    assert s.history_view_mode is HistoryViewMode.TABLE
    assert s.sound_notification_enabled and s.popup_notification_enabled
    assert not s.dark_mode_enabled


@pytest.mark.parametrize("v", [1, 2, 25, 450, 899, 900])
def test_work_minutes_in_bounds(v):
    s = UserSettings()
    s.work_minutes = v
    assert s.work_minutes == v
    assert s.work_seconds == v * 60


@pytest.mark.parametrize("field", ["work_minutes", "break_minutes", "daily_goal_minutes"])
@pytest.mark.parametrize("v", [-5, 0, 901, 10_000])
def test_out_of_range_rejected_without_clamping(field, v):
    s = UserSettings()
    before = getattr(s, field)
    with pytest.raises(InvalidDuration) as exc:
        setattr(s, field, v)
    assert exc.value.field == field
    assert exc.value.value == v
    assert (exc.value.minimum, exc.value.maximum) == (1, 900)
    assert getattr(s, field) == before


def test_invalid_duration_is_value_error():
    with pytest.raises(ValueError):
        UserSettings(work_minutes=0)


def test_non_integer_rejected():
    s = UserSettings()
    with pytest.raises(InvalidDuration):
        s.break_minutes = 2.5  # type: ignore[assignment]
    with pytest.raises(InvalidDuration):
        s.break_minutes = True  # type: ignore[assignment]


def test_chart_days_bounds():
    s = UserSettings()
    s.history_chart_days = 30
    with pytest.raises(InvalidDuration):
        s.history_chart_days = 31


def test_break_seconds_derived():
    s = UserSettings(30, 10)
    assert s.break_seconds == 600


def test_none_preferences_fall_back_to_defaults():
    s = UserSettings(notification_sound=NotificationSound.BELL, history_view_mode=HistoryViewMode.CHART)
    s.notification_sound = None  # type: ignore[assignment]
    s.history_view_mode = None  # type: ignore[assignment]
    assert s.notification_sound is NotificationSound.CHIME
    assert s.history_view_mode is HistoryViewMode.TABLE


def test_copy_is_equal_and_independent():
    s = UserSettings(40, 10, 120, notification_sound=NotificationSound.CUSTOM, custom_sound_path="/tmp/a.wav")
    c = s.copy()
    assert c == s
    c.work_minutes = 41
    assert s.work_minutes == 40
    assert c != s


def test_from_dict_missing_keys_use_defaults_and_ignores_unknown():
    s = UserSettings.from_dict({"workDurationMinutes": 50, "somethingElse": 1})
    assert s.work_minutes == 50
    assert s.break_minutes == 5
    assert s.daily_goal_minutes == 25


def test_from_dict_validates():
    with pytest.raises(InvalidDuration):
        UserSettings.from_dict({"breakDurationMinutes": 0})
