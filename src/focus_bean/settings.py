from __future__ import annotations

"""User settings: configured durations, daily goal and notification/view preferences.

Durations are validated on every assignment; out-of-range values raise
``InvalidDuration`` and the previous value is kept.
"""

from typing import Any, Dict, Optional

from .errors import InvalidDuration
from .models import HistoryViewMode, NotificationSound


class UserSettings:
    MIN_DURATION_MINUTES = 1
    MAX_WORK_DURATION_MINUTES = 900
    MAX_BREAK_DURATION_MINUTES = 900
    MAX_DAILY_GOAL_MINUTES = 900
    MIN_CHART_DAYS = 1
    MAX_CHART_DAYS = 30

    DEFAULT_WORK_DURATION_MINUTES = 25
    DEFAULT_BREAK_DURATION_MINUTES = 5
    DEFAULT_DAILY_GOAL_MINUTES = 25
    DEFAULT_CHART_DAYS = 7
    DEFAULT_NOTIFICATION_SOUND = NotificationSound.CHIME
    DEFAULT_HISTORY_VIEW_MODE = HistoryViewMode.TABLE

    def __init__(
        self,
        work_minutes: int = DEFAULT_WORK_DURATION_MINUTES,
        break_minutes: int = DEFAULT_BREAK_DURATION_MINUTES,
        daily_goal_minutes: int = DEFAULT_DAILY_GOAL_MINUTES,
        *,
        history_chart_days: int = DEFAULT_CHART_DAYS,
        sound_notification_enabled: bool = True,
        popup_notification_enabled: bool = True,
        notification_sound: Optional[NotificationSound] = None,
        custom_sound_path: Optional[str] = None,
        history_view_mode: Optional[HistoryViewMode] = None,
        dark_mode_enabled: bool = False,
    ) -> None:
        self._work_minutes = self.DEFAULT_WORK_DURATION_MINUTES
        self._break_minutes = self.DEFAULT_BREAK_DURATION_MINUTES
        self._daily_goal_minutes = self.DEFAULT_DAILY_GOAL_MINUTES
        self._history_chart_days = self.DEFAULT_CHART_DAYS
        self.work_minutes = work_minutes
        self.break_minutes = break_minutes
        self.daily_goal_minutes = daily_goal_minutes
        self.history_chart_days = history_chart_days
        self.sound_notification_enabled = sound_notification_enabled
        self.popup_notification_enabled = popup_notification_enabled
        self.notification_sound = notification_sound  # type: ignore[assignment]
        self.custom_sound_path = custom_sound_path
        self.history_view_mode = history_view_mode  # type: ignore[assignment]
        self.dark_mode_enabled = dark_mode_enabled

    # --- Validated durations --------------------------------------------
    @property
    def work_minutes(self) -> int:
        return self._work_minutes

    @work_minutes.setter
    def work_minutes(self, value: int) -> None:
        self._work_minutes = _validated(
            "work_minutes", value, self.MIN_DURATION_MINUTES, self.MAX_WORK_DURATION_MINUTES
        )

    @property
    def break_minutes(self) -> int:
        return self._break_minutes

    @break_minutes.setter
    def break_minutes(self, value: int) -> None:
        self._break_minutes = _validated(
            "break_minutes", value, self.MIN_DURATION_MINUTES, self.MAX_BREAK_DURATION_MINUTES
        )

    @property
    def daily_goal_minutes(self) -> int:
        return self._daily_goal_minutes

    @daily_goal_minutes.setter
    def daily_goal_minutes(self, value: int) -> None:
        self._daily_goal_minutes = _validated(
            "daily_goal_minutes", value, self.MIN_DURATION_MINUTES, self.MAX_DAILY_GOAL_MINUTES
        )

    @property
    def history_chart_days(self) -> int:
        return self._history_chart_days

    @history_chart_days.setter
    def history_chart_days(self, value: int) -> None:
        self._history_chart_days = _validated(
            "history_chart_days", value, self.MIN_CHART_DAYS, self.MAX_CHART_DAYS
        )

    @property
    def work_seconds(self) -> int:
        return self._work_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self._break_minutes * 60

    # --- Preferences with defaults --------------------------------------
    @property
    def notification_sound(self) -> NotificationSound:
        return self._notification_sound

    @notification_sound.setter
    def notification_sound(self, value: Optional[NotificationSound]) -> None:
        self._notification_sound = value if value is not None else self.DEFAULT_NOTIFICATION_SOUND

    @property
    def history_view_mode(self) -> HistoryViewMode:
        return self._history_view_mode

    @history_view_mode.setter
    def history_view_mode(self, value: Optional[HistoryViewMode]) -> None:
        self._history_view_mode = value if value is not None else self.DEFAULT_HISTORY_VIEW_MODE

    # --- Copy / equality ------------------------------------------------
    def copy(self) -> "UserSettings":
        return UserSettings.from_dict(self.to_dict())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserSettings):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"UserSettings(work={self._work_minutes}min, break={self._break_minutes}min, "
            f"daily_goal={self._daily_goal_minutes}min, sound={self.notification_sound.value}, "
            f"popup={self.popup_notification_enabled}, dark_mode={self.dark_mode_enabled})"
        )

    # --- Serialisation --------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "workDurationMinutes": self._work_minutes,
            "breakDurationMinutes": self._break_minutes,
            "dailyGoalMinutes": self._daily_goal_minutes,
            "historyChartDays": self._history_chart_days,
            "soundNotificationEnabled": self.sound_notification_enabled,
            "popupNotificationEnabled": self.popup_notification_enabled,
            "notificationSound": self.notification_sound.value,
            "customSoundPath": self.custom_sound_path,
            "historyViewMode": self.history_view_mode.value,
            "darkModeEnabled": self.dark_mode_enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSettings":
        sound = data.get("notificationSound")
        view_mode = data.get("historyViewMode")
        return cls(
            int(data.get("workDurationMinutes", cls.DEFAULT_WORK_DURATION_MINUTES)),
            int(data.get("breakDurationMinutes", cls.DEFAULT_BREAK_DURATION_MINUTES)),
            int(data.get("dailyGoalMinutes", cls.DEFAULT_DAILY_GOAL_MINUTES)),
            history_chart_days=int(data.get("historyChartDays", cls.DEFAULT_CHART_DAYS)),
            sound_notification_enabled=bool(data.get("soundNotificationEnabled", True)),
            popup_notification_enabled=bool(data.get("popupNotificationEnabled", True)),
            notification_sound=NotificationSound(sound) if sound else None,
            custom_sound_path=data.get("customSoundPath"),
            history_view_mode=HistoryViewMode(view_mode) if view_mode else None,
            dark_mode_enabled=bool(data.get("darkModeEnabled", False)),
        )


def _validated(field: str, value: int, minimum: int, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDuration(field, value, minimum, maximum)
    if value < minimum or value > maximum:
        raise InvalidDuration(field, value, minimum, maximum)
    return value


__all__ = ["UserSettings"]
