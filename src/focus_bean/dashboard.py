from __future__ import annotations

"""Dashboard UI: live countdown, controls and daily progress."""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QProgressBar,
)

from .config import MODE_COLORS
from .controller import TimerController
from .models import TimerMode
from .qt_bridge import TimerBridge
from .time_format import format_minutes, format_seconds


def idle_preview(controller: TimerController) -> tuple[int, str]:
    """Seconds and label shown while IDLE, based on the pending session kind."""
    settings = controller.settings
    if controller.pending_session_type is TimerMode.BREAK:
        return settings.break_seconds, "Break"
    return settings.work_seconds, "Focus"


class DashboardPage(QWidget):
    goal_reached = pyqtSignal(int)  # completed minutes today

    def __init__(self, controller: TimerController, bridge: TimerBridge):  # noqa: D401
        super().__init__()
        self._controller = controller
        self._bridge = bridge
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        self.mode_label = QLabel("Focus")
        self.mode_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.timer_label = QLabel("00:00")
        self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self.timer_label.font()
        font.setPointSize(36)
        self.timer_label.setFont(font)

        self.btn_toggle = QPushButton("Start")
        self.btn_reset = QPushButton("Reset")
        self.btn_skip = QPushButton("Skip")

        btn_row = QHBoxLayout()
        btn_row.addWidget(self.btn_toggle)
        btn_row.addWidget(self.btn_reset)
        btn_row.addWidget(self.btn_skip)

        self.goal_bar = QProgressBar()
        self.goal_bar.setTextVisible(True)
        self.today_label = QLabel("")
        self.streak_label = QLabel("")

        layout = QVBoxLayout(self)
        layout.addWidget(self.mode_label)
        layout.addWidget(self.timer_label)
        layout.addLayout(btn_row)
        layout.addSpacing(12)
        layout.addWidget(QLabel("Daily goal"))
        layout.addWidget(self.goal_bar)
        layout.addWidget(self.today_label)
        layout.addWidget(self.streak_label)
        layout.addStretch(1)

        self.btn_toggle.clicked.connect(self._controller.toggle)
        self.btn_reset.clicked.connect(self._controller.reset)
        self.btn_skip.clicked.connect(self._controller.skip)
        self._bridge.tick.connect(self._on_tick)
        self._bridge.state_changed.connect(self._on_state_changed)
        self._bridge.session_completed.connect(self._on_session_completed)

        self._goal_was_met = self._goal_met()
        self.refresh()

    # --- Refresh --------------------------------------------------------
    def refresh(self) -> None:
        state = self._controller.current_state
        self._apply_state(state)
        if state is TimerMode.IDLE:
            seconds, label = idle_preview(self._controller)
            self.timer_label.setText(format_seconds(seconds))
            self.mode_label.setText(label)
        else:
            self.timer_label.setText(format_seconds(self._controller.remaining_seconds))
        self.refresh_stats()

    def refresh_stats(self) -> None:
        history = self._controller.history
        goal = self._controller.settings.daily_goal_minutes
        done = history.todays_total_work_minutes()
        self.goal_bar.setRange(0, goal)
        self.goal_bar.setValue(min(done, goal))
        self.goal_bar.setFormat(f"{done} / {goal} min")
        self.today_label.setText(
            f"Today: {history.count_todays_completed_work_sessions()} sessions, {format_minutes(done)}"
        )
        streak = history.current_streak()
        self.streak_label.setText(f"Streak: {streak} day{'s' if streak != 1 else ''}")

    def _goal_met(self) -> bool:
        return self._controller.history.todays_total_work_minutes() >= self._controller.settings.daily_goal_minutes

    # --- Bridge callbacks -----------------------------------------------
    def _on_tick(self, remaining: int) -> None:
        if self._controller.current_state is not TimerMode.IDLE:
            self.timer_label.setText(format_seconds(remaining))

    def _on_state_changed(self, _old: str, _new: str) -> None:  # pragma: no cover UI logic
        self.refresh()

    def _on_session_completed(self, kind: str) -> None:  # pragma: no cover UI logic
        self.refresh()
        met = self._goal_met()
        if kind == TimerMode.WORK.value and met and not self._goal_was_met:
            self.goal_reached.emit(self._controller.history.todays_total_work_minutes())
        self._goal_was_met = met

    def _apply_state(self, state: TimerMode) -> None:  # pragma: no cover UI logic
        self.setStyleSheet(f"DashboardPage {{ background-color: {MODE_COLORS[state.value]}; }}")
        if state is TimerMode.IDLE:
            self.btn_toggle.setText("Start")
            self.btn_reset.setEnabled(False)
            self.btn_skip.setEnabled(False)
        elif state is TimerMode.PAUSED:
            self.btn_toggle.setText("Resume")
            self.btn_reset.setEnabled(True)
            self.btn_skip.setEnabled(True)
            before = self._controller.state_before_pause
            self.mode_label.setText(f"Paused ({before.display_name if before else ''})")
        else:
            self.btn_toggle.setText("Pause")
            self.btn_reset.setEnabled(True)
            self.btn_skip.setEnabled(True)
            self.mode_label.setText("Focus" if state is TimerMode.WORK else "Break")


__all__ = ["DashboardPage", "idle_preview"]
