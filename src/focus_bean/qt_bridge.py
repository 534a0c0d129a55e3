from __future__ import annotations

"""Qt adapters around the pure timer core.

 - ``QtTicker``: QTimer-backed ``Ticker`` delivering one tick per second.
 - ``TimerBridge``: re-emits countdown/state callbacks as Qt signals so widgets
   can connect to them like any other QObject.
"""

from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .controller import TimerController
from .models import TimerMode
from .ticker import TICK_INTERVAL_MS, TickCallback


class QtTicker(QObject):
    """QTimer-driven ticker; must live on the Qt main thread."""

    def __init__(self, interval_ms: int = TICK_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._callback: Optional[TickCallback] = None
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()


class TimerBridge(QObject):
    tick = pyqtSignal(int)  # remaining seconds
    state_changed = pyqtSignal(str, str)  # old, new (TimerMode values)
    session_completed = pyqtSignal(str)  # WORK|BREAK

    def __init__(self, controller: TimerController, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        controller.add_tick_listener(self.tick.emit)
        controller.add_state_listener(self._on_state)

    @property
    def controller(self) -> TimerController:
        return self._controller

    def _on_state(self, old: TimerMode, new: TimerMode) -> None:
        self.state_changed.emit(old.value, new.value)


class BridgingNotifier:
    """Notifier that forwards completions to a bridge signal and then to ``inner``."""

    def __init__(self, bridge: TimerBridge, inner: Optional[Callable[[TimerMode], None]] = None) -> None:
        self._bridge = bridge
        self._inner = inner

    def notify_completion(self, kind: TimerMode) -> None:
        self._bridge.session_completed.emit(kind.value)
        if self._inner is not None:
            self._inner(kind)


__all__ = ["QtTicker", "TimerBridge", "BridgingNotifier"]
