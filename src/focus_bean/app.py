from __future__ import annotations

import sys
import logging
from dataclasses import dataclass
from typing import Optional

from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import (
    QApplication,
    QMainWindow,
    QListWidget,
    QWidget,
    QStackedWidget,
    QHBoxLayout,
)

from .config import APP_NAME, DARK_MODE_STYLESHEET, AppConfig
from .controller import TimerController
from .dashboard import DashboardPage
from .history_page import HistoryPage
from .logging_setup import configure_logging
from .notification_manager import NotificationManager
from .persistence import PersistenceService
from .qt_bridge import BridgingNotifier, QtTicker, TimerBridge
from .settings_page import SettingsPage
from .timer_service import TimerService
from .toast import show_toast


@dataclass(slots=True)
class AppState:
    config: AppConfig
    persistence: PersistenceService
    controller: TimerController
    bridge: TimerBridge


def get_app_state(config: AppConfig | None = None) -> AppState:
    config = config or AppConfig.from_env()
    persistence = PersistenceService(config.data_dir)
    # Logging first
    configure_logging(persistence.data_directory, config.log_level)
    loaded = persistence.load()
    timer = TimerService(QtTicker(config.tick_interval_ms))
    controller = TimerController(timer, persistence, loaded.settings, loaded.history)
    bridge = TimerBridge(controller)
    logging.getLogger(__name__).info(
        "app_state_created", extra={"_json_data_file": str(persistence.data_file), "_json_sessions": len(loaded.history)}
    )
    return AppState(config=config, persistence=persistence, controller=controller, bridge=bridge)


class Sidebar(QListWidget):
    PAGES = ["Timer", "History", "Settings"]

    def __init__(self) -> None:
        super().__init__()
        self.addItems(self.PAGES)
        self.setFixedWidth(120)
        self.setCurrentRow(0)


class MainWindow(QMainWindow):  # pragma: no cover - UI assembly
    def __init__(self, state: AppState) -> None:  # noqa: D401
        super().__init__()
        self.state = state
        self.setWindowTitle(APP_NAME)
        self.resize(820, 420)
        self.setMinimumSize(700, 380)
        controller = state.controller

        self.notifications = NotificationManager(self, controller.settings)
        controller.set_notifier(BridgingNotifier(state.bridge, self.notifications.notify_completion))

        self.sidebar = Sidebar()
        self.dashboard = DashboardPage(controller, state.bridge)
        self.history_page = HistoryPage(controller)
        self.settings_page = SettingsPage(controller, self.notifications, self.apply_theme, self._on_settings_saved)
        self.pages = QStackedWidget()
        for page in (self.dashboard, self.history_page, self.settings_page):
            self.pages.addWidget(page)

        container = QWidget()
        container_layout = QHBoxLayout(container)
        container_layout.addWidget(self.sidebar)
        container_layout.addWidget(self.pages, 1)
        self.setCentralWidget(container)
        self.sidebar.currentRowChanged.connect(self._on_page_changed)

        state.bridge.session_completed.connect(lambda _kind: self.history_page.refresh())
        self.dashboard.goal_reached.connect(
            lambda minutes: show_toast(self, f"Daily goal reached: {minutes} minutes of focus today!")
        )
        self.apply_theme(controller.settings.dark_mode_enabled)

    # --- Slots --------------------------------------------------------
    def _on_page_changed(self, index: int) -> None:
        self.pages.setCurrentIndex(index)
        if self.pages.currentWidget() is self.history_page:
            self.history_page.refresh()

    def _on_settings_saved(self) -> None:
        self.dashboard.refresh()
        self.history_page.refresh()

    def apply_theme(self, dark: bool) -> None:
        self.setStyleSheet(DARK_MODE_STYLESHEET if dark else "")

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self.state.controller.shutdown()
        self.notifications.shutdown()
        super().closeEvent(event)


def run(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv
    app = QApplication(argv)
    app.setApplicationName(APP_NAME)
    state = get_app_state()
    window = MainWindow(state)
    window.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
