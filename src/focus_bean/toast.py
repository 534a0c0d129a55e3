from __future__ import annotations

"""Simple toast notification overlay widget."""

from typing import Callable, Optional

from PyQt6.QtCore import QTimer, Qt
from PyQt6.QtWidgets import QLabel, QWidget


class Toast(QLabel):  # pragma: no cover - UI utility
    def __init__(
        self,
        parent: QWidget,
        message: str,
        timeout_ms: int = 4000,
        on_close: Optional[Callable[[], None]] = None,
    ):
        super().__init__(parent)
        self._on_close = on_close
        self.setText(message)
        self.setWordWrap(True)
        self.setMaximumWidth(max(200, parent.width() - 40))
        self.setStyleSheet(
            """
            background: rgba(40,40,40,0.85);
            color: #fff; padding: 6px 12px; border-radius: 6px;
            """
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.adjustSize()
        w = parent.width()
        self.move(int((w - self.width()) / 2), 30)
        self.show()
        QTimer.singleShot(timeout_ms, self._dismiss)

    def _dismiss(self) -> None:
        if self._on_close is not None:
            self._on_close()
        self.close()


def show_toast(
    parent: QWidget,
    message: str,
    timeout_ms: int = 4000,
    on_close: Optional[Callable[[], None]] = None,
) -> None:  # pragma: no cover
    Toast(parent, message, timeout_ms, on_close)


__all__ = ["show_toast"]
