from __future__ import annotations

"""History page: session table or daily-minutes chart, weekly summary, clear action.

Design notes:
 - Table and chart are two pages of a QStackedWidget; the selected mode is
   saved in ``UserSettings.history_view_mode``.
 - The chart covers ``UserSettings.history_chart_days`` trailing days and is
   drawn with matplotlib's Qt canvas.
"""

from datetime import date
from typing import List, Tuple

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTableWidget, QTableWidgetItem, QPushButton,
    QComboBox, QStackedWidget, QMessageBox, QSizePolicy, QAbstractItemView,
)

from .controller import TimerController
from .history import SessionHistory
from .models import HistoryViewMode, TimerSession


def session_rows(history: SessionHistory) -> List[Tuple[str, str, str, str, str]]:
    """Newest-first table rows: date, start, end, type, status."""
    rows = []
    for s in reversed(history.sessions):
        rows.append(_row(s))
    return rows


def _row(s: TimerSession) -> Tuple[str, str, str, str, str]:
    return (
        s.start_time.date().isoformat(),
        s.start_time.strftime("%H:%M"),
        s.end_time.strftime("%H:%M"),
        f"{'Work' if s.is_work_session else 'Break'} ({s.duration_minutes}m)",
        "Completed" if s.completed else "Skipped",
    )


def weekly_summary(history: SessionHistory, today: date | None = None) -> str:
    return (
        f"This week: {history.count_this_weeks_completed_work_sessions(today)} sessions, "
        f"{history.this_weeks_total_work_minutes(today)} min · "
        f"Yesterday: {history.yesterdays_total_work_minutes(today)} min"
    )


class HistoryPage(QWidget):  # pragma: no cover heavy UI
    COLUMNS = ["Date", "Start", "End", "Type", "Status"]

    def __init__(self, controller: TimerController):
        super().__init__()
        self._controller = controller

        self.summary_label = QLabel("")
        self.mode_combo = QComboBox()
        for mode in HistoryViewMode:
            self.mode_combo.addItem(mode.display_name, mode)
        self.btn_clear = QPushButton("Clear History")

        top_row = QHBoxLayout()
        top_row.addWidget(self.summary_label, 1)
        top_row.addWidget(QLabel("View:"))
        top_row.addWidget(self.mode_combo)
        top_row.addWidget(self.btn_clear)

        self.table = QTableWidget(0, len(self.COLUMNS))
        self.table.setHorizontalHeaderLabels(self.COLUMNS)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)

        self.figure = Figure(figsize=(4, 3))
        self.canvas = FigureCanvas(self.figure)
        self.canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self.stack = QStackedWidget()
        self.stack.addWidget(self.table)
        self.stack.addWidget(self.canvas)

        layout = QVBoxLayout(self)
        layout.addLayout(top_row)
        layout.addWidget(self.stack, 1)

        idx = self.mode_combo.findData(controller.settings.history_view_mode)
        self.mode_combo.setCurrentIndex(max(idx, 0))
        self.mode_combo.currentIndexChanged.connect(self._on_mode_changed)
        self.btn_clear.clicked.connect(self._on_clear)
        self.refresh()

    # --- Rendering -----------------------------------------------------
    def refresh(self) -> None:
        history = self._controller.history
        self.summary_label.setText(weekly_summary(history))
        mode = self._controller.settings.history_view_mode
        self.stack.setCurrentIndex(0 if mode is HistoryViewMode.TABLE else 1)
        if mode is HistoryViewMode.TABLE:
            self._render_table(history)
        else:
            self._render_chart(history)

    def _render_table(self, history: SessionHistory) -> None:
        rows = session_rows(history)
        self.table.setRowCount(len(rows))
        for r, values in enumerate(rows):
            for c, value in enumerate(values):
                self.table.setItem(r, c, QTableWidgetItem(value))

    def _render_chart(self, history: SessionHistory) -> None:
        days = self._controller.settings.history_chart_days
        data = history.daily_work_minutes(days)
        goal = self._controller.settings.daily_goal_minutes
        self.figure.clear()
        ax = self.figure.add_subplot(111)
        labels = [d.strftime("%m-%d") for d, _ in data]
        values = [m for _, m in data]
        ax.bar(labels, values, color="#8B5A2B")
        ax.axhline(goal, color="#A0522D", linestyle="--", linewidth=1)
        ax.set_title(f"Focus minutes, last {days} days")
        ax.set_ylabel("Minutes")
        ax.tick_params(axis="x", labelrotation=45)
        self.figure.tight_layout()
        self.canvas.draw()

    # --- Slots --------------------------------------------------------
    def _on_mode_changed(self) -> None:
        mode = self.mode_combo.currentData()
        settings = self._controller.settings.copy()
        settings.history_view_mode = mode
        self._controller.update_preferences(settings)
        self.refresh()

    def _on_clear(self) -> None:
        answer = QMessageBox.question(
            self, "Clear History", "Delete all recorded sessions? This cannot be undone."
        )
        if answer == QMessageBox.StandardButton.Yes:
            self._controller.clear_history()
            self.refresh()


__all__ = ["HistoryPage", "session_rows", "weekly_summary"]
