from __future__ import annotations

"""Session history: append-only log of finished intervals plus derived statistics.

Design:
 - Records are only appended at the moment an interval ends, so list order is
   chronological.
 - Every query accepts an optional ``today`` reference date (defaults to
   ``date.today()``) which keeps them deterministic under test.
 - "Completed work" means kind == WORK and completed == True; only those count
   toward minutes, goals and streaks.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidRange
from .models import TimerSession

WEEK_DAYS = 7


def _resolve(today: Optional[date]) -> date:
    return today if today is not None else date.today()


class SessionHistory:
    def __init__(self, sessions: Iterable[TimerSession] | None = None) -> None:
        self._sessions: List[TimerSession] = list(sessions or [])

    # --- Mutation -------------------------------------------------------
    def add_session(self, session: TimerSession) -> None:
        if session is None:
            raise TypeError("session must not be None")
        self._sessions.append(session)

    def clear(self) -> None:
        self._sessions.clear()

    # --- Access ---------------------------------------------------------
    @property
    def sessions(self) -> Tuple[TimerSession, ...]:
        return tuple(self._sessions)

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[TimerSession]:
        return iter(tuple(self._sessions))

    def is_empty(self) -> bool:
        return not self._sessions

    # --- Date filtered views --------------------------------------------
    def sessions_for_date(self, day: date) -> List[TimerSession]:
        if day is None:
            raise TypeError("day must not be None")
        return [s for s in self._sessions if s.start_time.date() == day]

    def sessions_in_range(self, start: date, end: date) -> List[TimerSession]:
        if start is None or end is None:
            raise TypeError("start and end must not be None")
        if end < start:
            raise InvalidRange(f"end ({end}) must not be before start ({start})")
        return [s for s in self._sessions if start <= s.start_time.date() <= end]

    def todays_sessions(self, today: Optional[date] = None) -> List[TimerSession]:
        return self.sessions_for_date(_resolve(today))

    def this_weeks_sessions(self, today: Optional[date] = None) -> List[TimerSession]:
        """Sessions from the trailing 7 days, today included."""
        day = _resolve(today)
        return self.sessions_in_range(day - timedelta(days=WEEK_DAYS - 1), day)

    # --- Aggregates -----------------------------------------------------
    def completed_work_count_on(self, day: date) -> int:
        return _count_completed_work(self.sessions_for_date(day))

    def completed_work_minutes_on(self, day: date) -> int:
        return _sum_completed_work(self.sessions_for_date(day))

    def count_todays_completed_work_sessions(self, today: Optional[date] = None) -> int:
        return _count_completed_work(self.todays_sessions(today))

    def count_this_weeks_completed_work_sessions(self, today: Optional[date] = None) -> int:
        return _count_completed_work(self.this_weeks_sessions(today))

    def todays_total_work_minutes(self, today: Optional[date] = None) -> int:
        return _sum_completed_work(self.todays_sessions(today))

    def this_weeks_total_work_minutes(self, today: Optional[date] = None) -> int:
        return _sum_completed_work(self.this_weeks_sessions(today))

    def yesterdays_total_work_minutes(self, today: Optional[date] = None) -> int:
        return self.completed_work_minutes_on(_resolve(today) - timedelta(days=1))

    def daily_work_minutes(self, days: int, today: Optional[date] = None) -> List[Tuple[date, int]]:
        """(day, completed work minutes) for the trailing ``days`` days, oldest first."""
        if days < 1:
            raise InvalidRange(f"days must be at least 1, was: {days}")
        end = _resolve(today)
        start = end - timedelta(days=days - 1)
        totals = {start + timedelta(days=i): 0 for i in range(days)}
        for s in self.sessions_in_range(start, end):
            if s.counts_toward_goal:
                totals[s.start_time.date()] += s.duration_minutes
        return sorted(totals.items())

    def current_streak(self, today: Optional[date] = None) -> int:
        """Consecutive days with completed work, counted back from yesterday.

        Today is still in progress and never counts.
        """
        work_days = {s.start_time.date() for s in self._sessions if s.counts_toward_goal}
        check = _resolve(today) - timedelta(days=1)
        streak = 0
        while check in work_days:
            streak += 1
            check -= timedelta(days=1)
        return streak

    def __repr__(self) -> str:
        return f"SessionHistory(sessions={len(self._sessions)})"


def _count_completed_work(sessions: Sequence[TimerSession]) -> int:
    return sum(1 for s in sessions if s.counts_toward_goal)


def _sum_completed_work(sessions: Sequence[TimerSession]) -> int:
    return sum(s.duration_minutes for s in sessions if s.counts_toward_goal)


__all__ = ["SessionHistory"]
