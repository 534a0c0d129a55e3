from __future__ import annotations

"""Timer controller: the session state machine.

Maps user intents (start, pause, resume, reset, skip) and countdown expiry onto
mode transitions, records finished intervals into the session history, and
tracks which kind of interval should start next.

Design:
 - Tracking fields (start, planned minutes, kind) are set when an interval
   starts and cleared as soon as it is recorded. A cleared kind means
   "nothing to record", which is what stops ``skip`` from writing the same
   interval twice when the engine re-enters the completion handler.
 - ``reset`` abandons silently: nothing is recorded.
 - After a completion the engine goes back to IDLE; the next interval only
   starts on an explicit user action.
 - Persistence and notification are fire-and-forget. Their failures are
   logged here and never interrupt the timer.

Thread safety: single event-loop thread only.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Protocol

from .errors import InvalidArgument, InvalidDuration
from .history import SessionHistory
from .models import TimerMode, TimerSession
from .settings import UserSettings
from .timer_service import StateListener, TickListener, TimerService

_log = logging.getLogger(__name__)

TimeProvider = Callable[[], datetime]


class PersistenceSink(Protocol):
    def save(self, settings: UserSettings, history: SessionHistory) -> None: ...


class Notifier(Protocol):
    def notify_completion(self, kind: TimerMode) -> None: ...


class TimerController:
    def __init__(
        self,
        timer: TimerService,
        persistence: PersistenceSink,
        settings: UserSettings,
        history: SessionHistory,
        notifier: Optional[Notifier] = None,
        time_provider: Optional[TimeProvider] = None,
    ) -> None:
        for name, value in (("timer", timer), ("persistence", persistence), ("settings", settings), ("history", history)):
            if value is None:
                raise TypeError(f"{name} must not be None")
        self._timer = timer
        self._persistence = persistence
        self._settings = settings
        self._history = history
        self._notifier = notifier
        self._time_provider: TimeProvider = time_provider or datetime.now

        self._session_start: Optional[datetime] = None
        self._session_minutes: Optional[int] = None
        self._session_kind: Optional[TimerMode] = None
        self._pending_kind: Optional[TimerMode] = None

        self._timer.set_on_complete(self._on_timer_complete)

    # --- Accessors ------------------------------------------------------
    @property
    def settings(self) -> UserSettings:
        return self._settings

    @property
    def history(self) -> SessionHistory:
        return self._history

    @property
    def current_state(self) -> TimerMode:
        return self._timer.state

    @property
    def remaining_seconds(self) -> int:
        return self._timer.remaining_seconds

    @property
    def state_before_pause(self) -> Optional[TimerMode]:
        return self._timer.state_before_pause

    @property
    def pending_session_type(self) -> Optional[TimerMode]:
        """Kind to start on the next "go"; None means work (the default)."""
        return self._pending_kind

    @property
    def active_session_type(self) -> Optional[TimerMode]:
        return self._session_kind

    def set_pending_session_type(self, kind: Optional[TimerMode]) -> None:
        if kind is not None and not kind.is_session_kind:
            raise InvalidArgument(f"pending session type must be WORK or BREAK, was: {kind}")
        self._pending_kind = kind

    def set_notifier(self, notifier: Optional[Notifier]) -> None:
        self._notifier = notifier

    def add_tick_listener(self, listener: TickListener) -> None:
        self._timer.add_tick_listener(listener)

    def add_state_listener(self, listener: StateListener) -> None:
        self._timer.add_state_listener(listener)

    # --- User intents ---------------------------------------------------
    def start_work(self) -> None:
        self._start_session(TimerMode.WORK, self._settings.work_seconds, self._settings.work_minutes)

    def start_break(self) -> None:
        self._start_session(TimerMode.BREAK, self._settings.break_seconds, self._settings.break_minutes)

    def start_or_resume(self) -> None:
        state = self._timer.state
        if state is TimerMode.IDLE:
            if self._pending_kind is TimerMode.BREAK:
                self.start_break()
            else:
                self.start_work()
        elif state is TimerMode.PAUSED:
            self.resume()
        else:
            _log.debug("start_or_resume ignored, %s already running", state.value)

    def toggle(self) -> None:
        """Single play/pause button behaviour."""
        state = self._timer.state
        if state is TimerMode.IDLE:
            self.start_or_resume()
        elif state is TimerMode.PAUSED:
            self.resume()
        else:
            self.pause()

    def pause(self) -> None:
        self._timer.pause()

    def resume(self) -> None:
        self._timer.resume()

    def reset(self) -> None:
        self._clear_tracking()
        self._pending_kind = None
        self._timer.reset()
        _log.info("timer reset, current session discarded")

    def skip(self) -> None:
        if self._session_start is not None and self._session_kind is not None:
            self._record_session(completed=False)
        self._timer.skip()

    # --- Settings & history ---------------------------------------------
    def update_settings(self, work_minutes: int, break_minutes: int) -> None:
        previous_work = self._settings.work_minutes
        self._settings.work_minutes = work_minutes
        try:
            self._settings.break_minutes = break_minutes
        except InvalidDuration:
            self._settings.work_minutes = previous_work
            raise
        self.save_data()
        _log.info("settings updated: work=%smin, break=%smin", work_minutes, break_minutes)

    def update_preferences(self, other: UserSettings) -> None:
        """Apply everything except work/break durations from ``other`` and persist."""
        s = self._settings
        s.daily_goal_minutes = other.daily_goal_minutes
        s.history_chart_days = other.history_chart_days
        s.sound_notification_enabled = other.sound_notification_enabled
        s.popup_notification_enabled = other.popup_notification_enabled
        s.notification_sound = other.notification_sound
        s.custom_sound_path = other.custom_sound_path
        s.history_view_mode = other.history_view_mode
        s.dark_mode_enabled = other.dark_mode_enabled
        self.save_data()
        _log.info("preferences updated: %r", s)

    def clear_history(self) -> None:
        self._history.clear()
        self.save_data()
        _log.info("session history cleared")

    def save_data(self) -> None:
        try:
            self._persistence.save(self._settings, self._history)
        except Exception:
            _log.exception("persistence failed; timer continues")

    def shutdown(self) -> None:
        self._timer.ticker.stop()
        self.save_data()
        _log.info("controller shut down")

    # --- Internal -------------------------------------------------------
    def _start_session(self, kind: TimerMode, seconds: int, minutes: int) -> None:
        previous = (self._session_start, self._session_minutes, self._session_kind)
        # Tracking is in place before the engine notifies its state listeners.
        self._session_start = self._time_provider()
        self._session_minutes = minutes
        self._session_kind = kind
        try:
            self._timer.start(seconds, kind)
        except InvalidArgument:
            self._session_start, self._session_minutes, self._session_kind = previous
            raise
        _log.info("started %s session: %s minutes", kind.value, minutes)

    def _finished_kind(self) -> Optional[TimerMode]:
        if self._session_kind is not None:
            return self._session_kind
        # Tracking already cleared by skip(); the engine still knows the kind.
        state = self._timer.state
        if state.is_running:
            return state
        return self._timer.state_before_pause

    def _on_timer_complete(self) -> None:
        finished = self._finished_kind()
        if self._session_start is not None and self._session_kind is not None:
            self._record_session(completed=True)

        if finished is not None:
            self._pending_kind = finished.opposite()
            _log.info("%s session complete, %s is now pending", finished.value, self._pending_kind.value)

        self._timer.reset()

        if finished is not None:
            self._notify(finished)

    def _record_session(self, completed: bool) -> None:
        start = self._session_start
        kind = self._session_kind
        minutes = self._session_minutes
        if start is None or kind is None or minutes is None:
            raise RuntimeError("no active session to record")
        self._clear_tracking()
        # A wall clock that moved backwards must not produce an invalid record.
        end = max(self._time_provider(), start)
        if not completed:
            session = TimerSession.interrupted(start, end, kind, minutes)
        elif kind is TimerMode.WORK:
            session = TimerSession.completed_work(start, end, minutes)
        else:
            session = TimerSession.completed_break(start, end, minutes)
        self._history.add_session(session)
        self.save_data()
        _log.info("recorded %s session: completed=%s", kind.value, completed)

    def _clear_tracking(self) -> None:
        self._session_start = None
        self._session_minutes = None
        self._session_kind = None

    def _notify(self, kind: TimerMode) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify_completion(kind)
        except Exception:
            _log.exception("notifier failed for %s completion", kind.value)


__all__ = ["TimerController", "PersistenceSink", "Notifier", "TimeProvider"]
