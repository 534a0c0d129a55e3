from __future__ import annotations

"""Countdown engine: owns the remaining seconds and the current timer mode.

Design:
 - State machine: IDLE -> WORK|BREAK -> PAUSED -> WORK|BREAK ... -> IDLE.
 - Never starts its own clock. A ``Ticker`` calls ``tick()`` once per second
   while a countdown is running; the engine starts/stops the ticker itself.
 - Reaching zero (naturally or via ``skip``) fires the completion callback,
   which carries no data. The owner decides what the finished interval was.
 - Observers registered with ``add_tick_listener`` / ``add_state_listener``
   are plain callables; Qt binding happens in ``qt_bridge``.
"""

import logging
from typing import Callable, List, Optional

from .errors import InvalidArgument
from .models import TimerMode
from .ticker import ManualTicker, Ticker

_log = logging.getLogger(__name__)

TickListener = Callable[[int], None]  # remaining seconds
StateListener = Callable[[TimerMode, TimerMode], None]  # old, new


class TimerService:
    def __init__(self, ticker: Optional[Ticker] = None) -> None:
        self._ticker: Ticker = ticker if ticker is not None else ManualTicker()
        self._state: TimerMode = TimerMode.IDLE
        self._remaining: int = 0
        self._state_before_pause: Optional[TimerMode] = None
        self._on_complete: Optional[Callable[[], None]] = None
        self._tick_listeners: List[TickListener] = []
        self._state_listeners: List[StateListener] = []

    # --- Properties -----------------------------------------------------
    @property
    def state(self) -> TimerMode:
        return self._state

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def state_before_pause(self) -> Optional[TimerMode]:
        return self._state_before_pause

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def is_paused(self) -> bool:
        return self._state is TimerMode.PAUSED

    @property
    def ticker(self) -> Ticker:
        return self._ticker

    # --- Observers ------------------------------------------------------
    def set_on_complete(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_complete = callback

    def add_tick_listener(self, listener: TickListener) -> None:
        self._tick_listeners.append(listener)

    def add_state_listener(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def _set_state(self, new_state: TimerMode) -> None:
        old = self._state
        if new_state is old:
            return
        self._state = new_state
        for listener in list(self._state_listeners):
            listener(old, new_state)

    def _set_remaining(self, seconds: int) -> None:
        self._remaining = seconds
        for listener in list(self._tick_listeners):
            listener(seconds)

    # --- Public API -----------------------------------------------------
    def start(self, duration_seconds: int, kind: TimerMode) -> None:
        if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int) or duration_seconds <= 0:
            raise InvalidArgument(f"duration_seconds must be positive, was: {duration_seconds}")
        if not isinstance(kind, TimerMode) or not kind.is_session_kind:
            raise InvalidArgument(f"kind must be WORK or BREAK, was: {kind}")
        self._ticker.stop()
        self._state_before_pause = None
        self._set_remaining(duration_seconds)
        self._set_state(kind)
        self._ticker.start(self.tick)
        _log.info("timer started: %ss in %s", duration_seconds, kind.value)

    def pause(self) -> None:
        if not self._state.is_running:
            _log.debug("pause ignored in %s", self._state.value)
            return
        self._state_before_pause = self._state
        self._ticker.stop()
        self._set_state(TimerMode.PAUSED)
        _log.info("timer paused with %ss remaining", self._remaining)

    def resume(self) -> None:
        if self._state is not TimerMode.PAUSED or self._state_before_pause is None:
            _log.debug("resume ignored in %s", self._state.value)
            return
        restored = self._state_before_pause
        self._state_before_pause = None
        self._set_state(restored)
        self._ticker.start(self.tick)
        _log.info("timer resumed with %ss remaining", self._remaining)

    def reset(self) -> None:
        self._ticker.stop()
        self._state_before_pause = None
        self._set_remaining(0)
        self._set_state(TimerMode.IDLE)
        _log.info("timer reset to IDLE")

    def skip(self) -> None:
        if self._state is TimerMode.IDLE:
            _log.debug("skip ignored while IDLE")
            return
        _log.info("skipping current %s session", self._state.value)
        self._ticker.stop()
        self._set_remaining(0)
        self._fire_complete()

    def tick(self) -> None:
        if not self._state.is_running:
            # Late tick after pause/reset; the ticker may already be queued.
            return
        if self._remaining == 0:
            # Already reported; the owner has not reset yet.
            self._ticker.stop()
            return
        self._set_remaining(self._remaining - 1)
        if self._remaining == 0:
            self._ticker.stop()
            _log.info("timer completed")
            self._fire_complete()

    # --- Internal -------------------------------------------------------
    def _fire_complete(self) -> None:
        if self._on_complete is not None:
            self._on_complete()


__all__ = ["TimerService", "TickListener", "StateListener"]
