from __future__ import annotations

"""Application constants and environment-driven runtime configuration."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import __version__

APP_NAME = "Focus Bean"
APP_VERSION = __version__
APP_DATA_DIR_NAME = "FocusBean"
SESSION_HISTORY_FILENAME = "session_history.json"

DATA_DIR_ENV = "FOCUS_BEAN_DATA_DIR"
LOG_LEVEL_ENV = "FOCUS_BEAN_LOG_LEVEL"

# Background colour per timer mode (Qt stylesheet values)
MODE_COLORS = {
    "IDLE": "#dfe6e9",
    "WORK": "#E6A779",
    "BREAK": "#55efc4",
    "PAUSED": "#ffeaa7",
}
DARK_MODE_STYLESHEET = """
QWidget { background-color: #202225; color: #ddd; }
QLineEdit, QSpinBox, QComboBox { background: #2b2d31; color: #eee; border: 1px solid #444; }
QPushButton { background: #3a3d42; color: #eee; border: 1px solid #555; padding:4px 8px; }
QPushButton:hover { background: #44484f; }
QTableWidget { background: #2b2d31; }
"""


@dataclass(slots=True)
class AppConfig:
    data_dir: Optional[Path] = None
    log_level: int = logging.INFO
    tick_interval_ms: int = 1000

    @classmethod
    def from_env(cls) -> "AppConfig":
        data_dir = os.environ.get(DATA_DIR_ENV)
        level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO
        return cls(data_dir=Path(data_dir).expanduser() if data_dir else None, log_level=level)


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DATA_DIR_NAME",
    "SESSION_HISTORY_FILENAME",
    "DATA_DIR_ENV",
    "LOG_LEVEL_ENV",
    "MODE_COLORS",
    "DARK_MODE_STYLESHEET",
    "AppConfig",
]
