from __future__ import annotations

"""JSON persistence for settings and session history.

File layout (``session_history.json``)::

    {
      "version": 1,
      "settings": {"workDurationMinutes": 25, ...},
      "sessions": [
        {"startTime": "2026-01-07T10:30:45", "endTime": "...", "type": "WORK",
         "durationMinutes": 25, "completed": true}
      ]
    }

Timestamps are ISO-8601 local date-times without an offset.

Failure policy: ``save`` logs and swallows I/O errors; ``load`` returns
defaults on a missing, empty, unreadable or malformed file. Neither ever
raises into the timer.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from .config import APP_DATA_DIR_NAME, DATA_DIR_ENV, SESSION_HISTORY_FILENAME
from .history import SessionHistory
from .models import TimerSession
from .settings import UserSettings

SCHEMA_VERSION = 1

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class LoadedData:
    settings: UserSettings = field(default_factory=UserSettings)
    history: SessionHistory = field(default_factory=SessionHistory)


def default_data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    app_data = os.environ.get("APPDATA")
    if app_data:
        return Path(app_data) / APP_DATA_DIR_NAME
    _log.debug("APPDATA not set, using home directory for data")
    return Path.home() / f".{APP_DATA_DIR_NAME.lower()}"


class PersistenceService:
    def __init__(self, data_dir: Path | None = None) -> None:
        self._data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
        self._data_file = self._data_dir / SESSION_HISTORY_FILENAME

    @property
    def data_directory(self) -> Path:
        return self._data_dir

    @property
    def data_file(self) -> Path:
        return self._data_file

    def has_existing_data(self) -> bool:
        return self._data_file.is_file() and os.access(self._data_file, os.R_OK)

    # --- Save -----------------------------------------------------------
    def save(self, settings: UserSettings, history: SessionHistory) -> None:
        if settings is None or history is None:
            raise TypeError("settings and history must not be None")
        payload = encode(settings, history)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".session_history.", suffix=".tmp", dir=self._data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self._data_file)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError:
            _log.exception("failed to save data to %s", self._data_file)
            return
        _log.info("saved %d sessions to %s", len(history), self._data_file)

    # --- Load -----------------------------------------------------------
    def load(self) -> LoadedData:
        if not self._data_file.exists():
            _log.info("no data file found, using defaults")
            return LoadedData()
        try:
            text = self._data_file.read_text(encoding="utf-8")
            if not text.strip():
                _log.warning("data file was empty, using defaults")
                return LoadedData()
            loaded = decode(json.loads(text))
        except OSError:
            _log.exception("failed to read data from %s", self._data_file)
            return LoadedData()
        # UnicodeDecodeError is a ValueError; deeply nested JSON raises RecursionError.
        except (ValueError, TypeError, KeyError, AttributeError, RecursionError):
            _log.exception("failed to parse data from %s", self._data_file)
            return LoadedData()
        _log.info("loaded %d sessions from %s", len(loaded.history), self._data_file)
        return loaded


# --- Codec ------------------------------------------------------------------

def encode(settings: UserSettings, history: SessionHistory) -> Dict[str, Any]:
    return {
        "version": SCHEMA_VERSION,
        "settings": settings.to_dict(),
        "sessions": [s.to_dict() for s in history],
    }


def decode(data: Any) -> LoadedData:
    if not isinstance(data, dict):
        raise ValueError("top-level JSON value must be an object")
    version = data.get("version", SCHEMA_VERSION)
    if not isinstance(version, int) or version > SCHEMA_VERSION:
        raise ValueError(f"unsupported schema version: {version!r}")
    raw_settings = data.get("settings")
    settings = UserSettings.from_dict(raw_settings) if raw_settings else UserSettings()
    raw_sessions = data.get("sessions") or []
    if not isinstance(raw_sessions, list):
        raise ValueError("sessions must be a list")
    history = SessionHistory(TimerSession.from_dict(item) for item in raw_sessions)
    return LoadedData(settings=settings, history=history)


__all__ = ["PersistenceService", "LoadedData", "SCHEMA_VERSION", "default_data_dir", "encode", "decode"]
