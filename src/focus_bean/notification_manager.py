from __future__ import annotations

"""Completion notifications: tray balloon, in-window toast and sound.

Design notes:
 - ``notify_completion`` is the only entry point used by the controller. It
   never raises; every failure is logged and swallowed so the timer keeps
   running.
 - Popups and sounds are gated by ``UserSettings`` flags read at call time,
   so settings changes apply to the next completion without rewiring.
 - Bundled sounds are looked up under ``focus_bean/sounds``. A missing file
   falls back to the system beep.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Optional, Tuple

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtGui import QIcon
from PyQt6.QtMultimedia import QSoundEffect
from PyQt6.QtWidgets import QApplication, QSystemTrayIcon, QWidget

from .config import APP_NAME
from .models import NotificationSound, TimerMode
from .settings import UserSettings
from .toast import show_toast

_log = logging.getLogger(__name__)

SOUND_VOLUME = 0.8


def completion_message(kind: TimerMode) -> Tuple[str, str]:
    if kind is TimerMode.WORK:
        return "Focus Session Complete!", "Great work! It's time to take a break."
    if kind is TimerMode.BREAK:
        return "Break Time Over!", "Ready to get back to work?"
    return "Session Complete!", "Your timer has finished."


def bundled_sound_path(sound: NotificationSound) -> Optional[Path]:
    name = sound.resource_name
    if name is None:
        return None
    candidate = resources.files("focus_bean").joinpath("sounds", name)
    path = Path(str(candidate))
    return path if path.is_file() else None


def resolve_sound_path(sound: NotificationSound, custom_path: Optional[str]) -> Optional[Path]:
    if sound.is_custom:
        if not custom_path or not custom_path.strip():
            _log.warning("custom sound selected but no path provided")
            return None
        path = Path(custom_path).expanduser()
        if not path.is_file():
            _log.warning("custom sound file not found: %s", path)
            return None
        return path
    path = bundled_sound_path(sound)
    if path is None and sound.resource_name is not None:
        _log.warning("sound resource not found: %s", sound.resource_name)
    return path


class NotificationManager(QObject):  # pragma: no cover - UI heavy
    def __init__(self, parent: QWidget, settings: UserSettings) -> None:
        super().__init__(parent)
        self._parent_widget = parent
        self._settings = settings
        self._effect: Optional[QSoundEffect] = None
        self._loaded: Optional[Tuple[NotificationSound, Optional[str]]] = None

        self._tray: Optional[QSystemTrayIcon] = None
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray = QSystemTrayIcon(parent)
            self._tray.setToolTip(APP_NAME)
            # Empty fallback icon; packaging can bundle a real one.
            self._tray.setIcon(QIcon())
            self._tray.setVisible(True)
        else:
            _log.warning("system tray not available; popups use in-window toasts only")

    # --- Public API ----------------------------------------------------
    def notify_completion(self, kind: TimerMode) -> None:
        _log.info("completion notification for %s", kind.value)
        try:
            if self._settings.sound_notification_enabled:
                self.play_sound(self._settings.notification_sound, self._settings.custom_sound_path)
            if self._settings.popup_notification_enabled:
                self._show_popup(kind)
        except Exception:
            _log.exception("notification failed")

    def play_sound(self, sound: NotificationSound, custom_path: Optional[str] = None) -> None:
        if sound.is_silent:
            return
        if sound.is_system_beep:
            QApplication.beep()
            return
        if self._loaded != (sound, custom_path):
            self._load(sound, custom_path)
        if self._effect is None:
            QApplication.beep()
            return
        self._effect.play()

    def stop_sound(self) -> None:
        if self._effect is not None:
            self._effect.stop()

    def shutdown(self) -> None:
        self.stop_sound()
        if self._tray is not None:
            self._tray.hide()
            self._tray = None
        _log.info("notification manager shut down")

    # --- Internal -------------------------------------------------------
    def _load(self, sound: NotificationSound, custom_path: Optional[str]) -> None:
        self._loaded = (sound, custom_path)
        path = resolve_sound_path(sound, custom_path)
        if path is None:
            self._effect = None
            return
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(path)))
        effect.setVolume(SOUND_VOLUME)
        self._effect = effect

    def _show_popup(self, kind: TimerMode) -> None:
        title, message = completion_message(kind)
        show_toast(self._parent_widget, f"{title} {message}", on_close=self.stop_sound)
        if self._tray is not None:
            self._tray.showMessage(title, message, QSystemTrayIcon.MessageIcon.Information, 5000)


__all__ = ["NotificationManager", "completion_message", "resolve_sound_path", "bundled_sound_path"]
