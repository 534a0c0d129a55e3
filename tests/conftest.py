import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Headless Qt for pytest-qt
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure src/ is on sys.path for direct test invocation without an editable install
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from focus_bean.controller import TimerController
from focus_bean.history import SessionHistory
from focus_bean.persistence import PersistenceService
from focus_bean.settings import UserSettings
from focus_bean.ticker import ManualTicker
from focus_bean.timer_service import TimerService


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)

    def __call__(self) -> datetime:
        return self.now


class RecordingNotifier:
    def __init__(self):
        self.calls = []

    def notify_completion(self, kind):
        self.calls.append(kind)


class RecordingSink:
    def __init__(self):
        self.saves = 0

    def save(self, settings, history):
        self.saves += 1


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime.now().replace(hour=10, minute=0, second=0, microsecond=0))


@pytest.fixture()
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture()
def timer(ticker: ManualTicker) -> TimerService:
    return TimerService(ticker)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def persistence(tmp_path: Path) -> PersistenceService:
    return PersistenceService(tmp_path / "data")


@pytest.fixture()
def controller(timer, sink, notifier, clock) -> TimerController:
    # Short durations keep tick loops small: 1 minute work, 1 minute break
    settings = UserSettings(1, 1)
    return TimerController(timer, sink, settings, SessionHistory(), notifier=notifier, time_provider=clock)
