from __future__ import annotations

"""Settings page: durations, daily goal, notifications, theme; JSON export/import."""

import json
import logging
from typing import Callable

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QCheckBox, QPushButton, QSpinBox, QFileDialog, QComboBox,
)

from .controller import TimerController
from .errors import InvalidDuration
from .models import NotificationSound
from .notification_manager import NotificationManager
from .settings import UserSettings
from .toast import show_toast

_log = logging.getLogger(__name__)


class SettingsPage(QWidget):  # pragma: no cover UI heavy
    def __init__(
        self,
        controller: TimerController,
        notifications: NotificationManager,
        apply_theme_cb: Callable[[bool], None],
        on_saved: Callable[[], None] | None = None,
    ):
        super().__init__()
        self._controller = controller
        self._notifications = notifications
        self._apply_theme_cb = apply_theme_cb
        self._on_saved = on_saved

        layout = QVBoxLayout(self)

        # Durations
        layout.addWidget(QLabel("Durations (minutes)"))
        dur_row = QHBoxLayout()
        self.work_spin = QSpinBox(); self.work_spin.setRange(UserSettings.MIN_DURATION_MINUTES, UserSettings.MAX_WORK_DURATION_MINUTES)
        self.break_spin = QSpinBox(); self.break_spin.setRange(UserSettings.MIN_DURATION_MINUTES, UserSettings.MAX_BREAK_DURATION_MINUTES)
        self.goal_spin = QSpinBox(); self.goal_spin.setRange(UserSettings.MIN_DURATION_MINUTES, UserSettings.MAX_DAILY_GOAL_MINUTES)
        self.chart_spin = QSpinBox(); self.chart_spin.setRange(UserSettings.MIN_CHART_DAYS, UserSettings.MAX_CHART_DAYS)
        for lbl, w in [("Work", self.work_spin), ("Break", self.break_spin), ("Daily Goal", self.goal_spin), ("Chart Days", self.chart_spin)]:
            dur_row.addWidget(QLabel(lbl)); dur_row.addWidget(w)
        dur_row.addStretch(1)
        layout.addLayout(dur_row)

        # Notifications
        layout.addWidget(QLabel("Notifications"))
        self.sound_cb = QCheckBox("Play sound when a session ends")
        self.popup_cb = QCheckBox("Show popup when a session ends")
        layout.addWidget(self.sound_cb)
        layout.addWidget(self.popup_cb)
        sound_row = QHBoxLayout()
        self.sound_combo = QComboBox()
        for sound in NotificationSound:
            self.sound_combo.addItem(sound.display_name, sound)
        self.btn_custom = QPushButton("Choose File...")
        self.custom_label = QLabel("")
        self.btn_preview = QPushButton("Preview")
        for w in (QLabel("Sound:"), self.sound_combo, self.btn_custom, self.custom_label, self.btn_preview):
            sound_row.addWidget(w)
        sound_row.addStretch(1)
        layout.addLayout(sound_row)

        # Theme
        self.dark_cb = QCheckBox("Dark mode")
        layout.addWidget(self.dark_cb)

        # Buttons
        btn_row = QHBoxLayout()
        self.btn_save = QPushButton("Save Settings")
        self.btn_export = QPushButton("Export JSON")
        self.btn_import = QPushButton("Import JSON")
        for b in (self.btn_save, self.btn_export, self.btn_import):
            btn_row.addWidget(b)
        btn_row.addStretch(1)
        layout.addLayout(btn_row)
        layout.addStretch(1)

        self._custom_path: str | None = None
        self._load_settings(controller.settings)

        self.btn_save.clicked.connect(self._save)
        self.btn_export.clicked.connect(self._export)
        self.btn_import.clicked.connect(self._import)
        self.btn_custom.clicked.connect(self._choose_custom)
        self.btn_preview.clicked.connect(self._preview)
        self.sound_combo.currentIndexChanged.connect(self._update_custom_visibility)

    # --- Core ---------------------------------------------------------
    def _load_settings(self, s: UserSettings) -> None:
        self.work_spin.setValue(s.work_minutes)
        self.break_spin.setValue(s.break_minutes)
        self.goal_spin.setValue(s.daily_goal_minutes)
        self.chart_spin.setValue(s.history_chart_days)
        self.sound_cb.setChecked(s.sound_notification_enabled)
        self.popup_cb.setChecked(s.popup_notification_enabled)
        self.sound_combo.setCurrentIndex(max(self.sound_combo.findData(s.notification_sound), 0))
        self._custom_path = s.custom_sound_path
        self.dark_cb.setChecked(s.dark_mode_enabled)
        self._update_custom_visibility()

    def _form_settings(self) -> UserSettings:
        return UserSettings(
            self.work_spin.value(),
            self.break_spin.value(),
            self.goal_spin.value(),
            history_chart_days=self.chart_spin.value(),
            sound_notification_enabled=self.sound_cb.isChecked(),
            popup_notification_enabled=self.popup_cb.isChecked(),
            notification_sound=self.sound_combo.currentData(),
            custom_sound_path=self._custom_path,
            history_view_mode=self._controller.settings.history_view_mode,
            dark_mode_enabled=self.dark_cb.isChecked(),
        )

    def _save(self) -> None:
        try:
            form = self._form_settings()
            self._controller.update_settings(form.work_minutes, form.break_minutes)
        except InvalidDuration as e:
            show_toast(self, f"Invalid {e.field}: must be {e.minimum}-{e.maximum}")
            return
        self._controller.update_preferences(form)
        self._apply_theme_cb(form.dark_mode_enabled)
        if self._on_saved:
            self._on_saved()
        show_toast(self, "Settings saved")

    def _update_custom_visibility(self) -> None:
        is_custom = self.sound_combo.currentData() is NotificationSound.CUSTOM
        self.btn_custom.setVisible(is_custom)
        self.custom_label.setVisible(is_custom)
        self.custom_label.setText(self._custom_path or "(no file)")

    def _choose_custom(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Choose Sound", filter="Audio (*.wav)")
        if path:
            self._custom_path = path
            self._update_custom_visibility()

    def _preview(self) -> None:
        self._notifications.play_sound(self.sound_combo.currentData(), self._custom_path)

    # --- Export/Import ------------------------------------------------
    def _export(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self, "Export Settings", filter="JSON (*.json)")
        if not path:
            return
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._form_settings().to_dict(), f, indent=2)
        except (OSError, InvalidDuration) as e:
            _log.warning("settings export failed: %s", e)
            show_toast(self, f"Export failed: {e}")
            return
        show_toast(self, "Exported")

    def _import(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import Settings", filter="JSON (*.json)")
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                imported = UserSettings.from_dict(json.load(f))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            _log.warning("settings import failed: %s", e)
            show_toast(self, f"Import failed: {e}")
            return
        self._load_settings(imported)
        show_toast(self, "Imported; press Save to apply")


__all__ = ["SettingsPage"]
