from __future__ import annotations

"""Tick sources for the countdown.

The countdown never owns a clock; it asks a ``Ticker`` to start or stop
calling it back once per second. The Qt implementation lives in
``qt_bridge.QtTicker``.
"""

from typing import Callable, Optional, Protocol

TickCallback = Callable[[], None]

TICK_INTERVAL_MS = 1000


class Ticker(Protocol):
    def start(self, callback: TickCallback) -> None: ...

    def stop(self) -> None: ...

    @property
    def is_active(self) -> bool: ...


class ManualTicker:
    """Ticker for headless use and tests; ``fire`` delivers ticks on demand."""

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None
        self._active = False
        self.starts = 0
        self.stops = 0

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._active = True
        self.starts += 1

    def stop(self) -> None:
        self._active = False
        self.stops += 1

    @property
    def is_active(self) -> bool:
        return self._active

    def fire(self, count: int = 1) -> int:
        """Deliver up to ``count`` ticks, stopping early if the ticker is stopped.

        Returns the number of ticks actually delivered.
        """
        delivered = 0
        for _ in range(count):
            if not self._active or self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered


__all__ = ["Ticker", "ManualTicker", "TickCallback", "TICK_INTERVAL_MS"]
