from __future__ import annotations

"""Value types shared by the timer core: modes, preferences enums and session records."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .errors import InvalidSession


class TimerMode(str, Enum):
    IDLE = "IDLE"
    WORK = "WORK"
    BREAK = "BREAK"
    PAUSED = "PAUSED"

    @property
    def display_name(self) -> str:
        return _MODE_LABELS[self]

    @property
    def is_running(self) -> bool:
        return self in (TimerMode.WORK, TimerMode.BREAK)

    @property
    def is_session_kind(self) -> bool:
        """WORK and BREAK are the only kinds an interval can have."""
        return self.is_running

    def opposite(self) -> "TimerMode":
        if self is TimerMode.WORK:
            return TimerMode.BREAK
        if self is TimerMode.BREAK:
            return TimerMode.WORK
        raise ValueError(f"{self.value} has no opposite session kind")


_MODE_LABELS = {
    TimerMode.IDLE: "Ready",
    TimerMode.WORK: "Working",
    TimerMode.BREAK: "Break",
    TimerMode.PAUSED: "Paused",
}


class NotificationSound(str, Enum):
    CHIME = "CHIME"
    BELL = "BELL"
    DING = "DING"
    SOFT = "SOFT"
    SYSTEM_BEEP = "SYSTEM_BEEP"
    NONE = "NONE"
    CUSTOM = "CUSTOM"

    @property
    def display_name(self) -> str:
        return _SOUND_LABELS[self]

    @property
    def resource_name(self) -> Optional[str]:
        """Bundled WAV file name, or None for sounds without an audio file."""
        return _SOUND_FILES.get(self)

    @property
    def is_silent(self) -> bool:
        return self is NotificationSound.NONE

    @property
    def is_system_beep(self) -> bool:
        return self is NotificationSound.SYSTEM_BEEP

    @property
    def is_custom(self) -> bool:
        return self is NotificationSound.CUSTOM


_SOUND_LABELS = {
    NotificationSound.CHIME: "Chime",
    NotificationSound.BELL: "Bell",
    NotificationSound.DING: "Ding",
    NotificationSound.SOFT: "Soft",
    NotificationSound.SYSTEM_BEEP: "System Beep",
    NotificationSound.NONE: "None",
    NotificationSound.CUSTOM: "Custom...",
}

_SOUND_FILES = {
    NotificationSound.CHIME: "chime.wav",
    NotificationSound.BELL: "bell.wav",
    NotificationSound.DING: "ding.wav",
    NotificationSound.SOFT: "soft.wav",
}


class HistoryViewMode(str, Enum):
    TABLE = "TABLE"
    CHART = "CHART"

    @property
    def display_name(self) -> str:
        return self.value.title()


# --- Session records --------------------------------------------------------

def _parse_local_datetime(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is not None:
        raise ValueError(f"expected a local date-time without offset, got {value!r}")
    return dt


@dataclass(frozen=True, slots=True)
class TimerSession:
    """One finished interval. Built once when the interval ends, never mutated."""

    start_time: datetime
    end_time: datetime
    kind: TimerMode
    duration_minutes: int
    completed: bool

    def __post_init__(self) -> None:
        if self.start_time is None or self.end_time is None:
            raise InvalidSession("start_time and end_time are required")
        if not isinstance(self.kind, TimerMode) or not self.kind.is_session_kind:
            raise InvalidSession(f"kind must be WORK or BREAK, was: {self.kind}")
        if self.duration_minutes <= 0:
            raise InvalidSession(f"duration_minutes must be positive, was: {self.duration_minutes}")
        if self.end_time < self.start_time:
            raise InvalidSession("end_time must not be before start_time")

    # --- Factories ------------------------------------------------------
    @classmethod
    def completed_work(cls, start: datetime, end: datetime, minutes: int) -> "TimerSession":
        return cls(start, end, TimerMode.WORK, minutes, True)

    @classmethod
    def completed_break(cls, start: datetime, end: datetime, minutes: int) -> "TimerSession":
        return cls(start, end, TimerMode.BREAK, minutes, True)

    @classmethod
    def interrupted(cls, start: datetime, end: datetime, kind: TimerMode, minutes: int) -> "TimerSession":
        return cls(start, end, kind, minutes, False)

    # --- Predicates -----------------------------------------------------
    @property
    def is_work_session(self) -> bool:
        return self.kind is TimerMode.WORK

    @property
    def is_break_session(self) -> bool:
        return self.kind is TimerMode.BREAK

    @property
    def counts_toward_goal(self) -> bool:
        return self.is_work_session and self.completed

    # --- Serialisation --------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "type": self.kind.value,
            "durationMinutes": self.duration_minutes,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimerSession":
        return cls(
            start_time=_parse_local_datetime(data["startTime"]),
            end_time=_parse_local_datetime(data["endTime"]),
            kind=TimerMode(data["type"]),
            duration_minutes=int(data["durationMinutes"]),
            completed=bool(data["completed"]),
        )


__all__ = [
    "TimerMode",
    "NotificationSound",
    "HistoryViewMode",
    "TimerSession",
]
