import json
from datetime import datetime, timedelta

from focus_bean.history import SessionHistory
from focus_bean.models import HistoryViewMode, NotificationSound, TimerMode, TimerSession
from focus_bean.persistence import SCHEMA_VERSION, PersistenceService, default_data_dir
from focus_bean.settings import UserSettings


def sample_history() -> SessionHistory:
    t = datetime(2026, 1, 7, 10, 30, 45)
    return SessionHistory([
        TimerSession.completed_work(t, t + timedelta(minutes=25), 25),
        TimerSession.completed_break(t + timedelta(minutes=25), t + timedelta(minutes=30), 5),
        TimerSession.interrupted(t + timedelta(hours=1), t + timedelta(hours=1, minutes=7), TimerMode.WORK, 25),
    ])


def test_defaults_when_no_file(persistence):
    assert not persistence.has_existing_data()
    loaded = persistence.load()
    s = loaded.settings
    assert (s.work_minutes, s.break_minutes, s.daily_goal_minutes) == (25, 5, 25)
    assert loaded.history.is_empty()


def test_round_trip_preserves_everything(persistence):
    settings = UserSettings(
        30, 10, 120,
        history_chart_days=14,
        sound_notification_enabled=False,
        notification_sound=NotificationSound.CUSTOM,
        custom_sound_path="/home/me/ding.wav",
        history_view_mode=HistoryViewMode.CHART,
        dark_mode_enabled=True,
    )
    history = sample_history()
    persistence.save(settings, history)
    assert persistence.has_existing_data()

    loaded = persistence.load()
    assert loaded.settings == settings
    assert loaded.history.sessions == history.sessions


def test_file_layout(persistence):
    persistence.save(UserSettings(), sample_history())
    assert persistence.data_file.name == "session_history.json"
    data = json.loads(persistence.data_file.read_text(encoding="utf-8"))
    assert data["version"] == SCHEMA_VERSION
    assert data["settings"]["workDurationMinutes"] == 25
    first = data["sessions"][0]
    assert first["startTime"] == "2026-01-07T10:30:45"
    assert first["type"] == "WORK"
    assert first["durationMinutes"] == 25
    assert first["completed"] is True
    # No temp files left behind
    assert [p.name for p in persistence.data_directory.iterdir()] == ["session_history.json"]


def test_corrupted_json_returns_defaults(persistence):
    persistence.data_directory.mkdir(parents=True)
    persistence.data_file.write_text("{invalid json", encoding="utf-8")
    loaded = persistence.load()
    assert loaded.settings == UserSettings()
    assert loaded.history.is_empty()


def test_empty_file_returns_defaults(persistence):
    persistence.data_directory.mkdir(parents=True)
    persistence.data_file.write_text("  \n", encoding="utf-8")
    assert persistence.load().settings.work_minutes == 25


def test_invalid_values_return_defaults(persistence):
    persistence.data_directory.mkdir(parents=True)
    bad = {"version": 1, "settings": {"workDurationMinutes": 5000}, "sessions": []}
    persistence.data_file.write_text(json.dumps(bad), encoding="utf-8")
    assert persistence.load().settings.work_minutes == 25

    bad_session = {
        "version": 1,
        "settings": {},
        "sessions": [{"startTime": "2026-01-07T10:00:00", "endTime": "2026-01-07T09:00:00",
                      "type": "WORK", "durationMinutes": 25, "completed": True}],
    }
    persistence.data_file.write_text(json.dumps(bad_session), encoding="utf-8")
    assert persistence.load().history.is_empty()


def test_wrong_top_level_type_returns_defaults(persistence):
    persistence.data_directory.mkdir(parents=True)
    persistence.data_file.write_text("[1, 2, 3]", encoding="utf-8")
    assert persistence.load().history.is_empty()


def test_missing_sections_use_defaults(persistence):
    persistence.data_directory.mkdir(parents=True)
    persistence.data_file.write_text('{"version": 1}', encoding="utf-8")
    loaded = persistence.load()
    assert loaded.settings == UserSettings()
    assert loaded.history.is_empty()


def test_save_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    service = PersistenceService(blocker / "data")
    service.save(UserSettings(), SessionHistory())  # must not raise
    assert not service.has_existing_data()


def test_save_overwrites_previous(persistence):
    persistence.save(UserSettings(), sample_history())
    persistence.save(UserSettings(40, 5), SessionHistory())
    loaded = persistence.load()
    assert loaded.settings.work_minutes == 40
    assert loaded.history.is_empty()


def test_default_data_dir_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("FOCUS_BEAN_DATA_DIR", str(tmp_path / "custom"))
    assert default_data_dir() == tmp_path / "custom"


def test_default_data_dir_appdata(monkeypatch, tmp_path):
    monkeypatch.delenv("FOCUS_BEAN_DATA_DIR", raising=False)
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert default_data_dir() == tmp_path / "FocusBean"


def test_invalid_utf8_returns_defaults(persistence):
    persistence.data_directory.mkdir(parents=True)
    persistence.data_file.write_bytes(b'{"version": 1, "settings": {"workDurationMinutes": 3\xff}}')
    loaded = persistence.load()
    assert loaded.settings == UserSettings()
    assert loaded.history.is_empty()


def test_deeply_nested_json_returns_defaults(persistence):
    persistence.data_directory.mkdir(parents=True)
    persistence.data_file.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
    loaded = persistence.load()
    assert loaded.settings == UserSettings()
    assert loaded.history.is_empty()
