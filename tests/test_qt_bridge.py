from focus_bean.controller import TimerController
from focus_bean.dashboard import DashboardPage, idle_preview
from focus_bean.history import SessionHistory
from focus_bean.models import TimerMode
from focus_bean.qt_bridge import BridgingNotifier, QtTicker, TimerBridge
from focus_bean.settings import UserSettings
from focus_bean.timer_service import TimerService


def test_qt_ticker_delivers_ticks_until_stopped(qtbot):
    ticker = QtTicker(interval_ms=5)
    ticks = []
    ticker.start(lambda: ticks.append(1))
    assert ticker.is_active
    qtbot.waitUntil(lambda: len(ticks) >= 3, timeout=2000)
    ticker.stop()
    assert not ticker.is_active
    seen = len(ticks)
    qtbot.wait(30)
    assert len(ticks) == seen


def test_countdown_driven_by_qt_ticker_completes(qtbot, sink, notifier):
    timer = TimerService(QtTicker(interval_ms=2))
    controller = TimerController(timer, sink, UserSettings(1, 1), SessionHistory(), notifier=notifier)
    controller.start_work()
    qtbot.waitUntil(lambda: controller.current_state is TimerMode.IDLE, timeout=5000)
    assert notifier.calls == [TimerMode.WORK]
    assert len(controller.history) == 1
    assert controller.pending_session_type is TimerMode.BREAK


def test_bridge_reemits_engine_callbacks(qtbot, controller):
    bridge = TimerBridge(controller)
    with qtbot.waitSignal(bridge.state_changed) as blocker:
        controller.start_work()
    assert blocker.args == ["IDLE", "WORK"]
    with qtbot.waitSignal(bridge.tick) as blocker:
        controller._timer.tick()
    assert blocker.args == [59]


def test_bridging_notifier_emits_and_forwards(qtbot, controller):
    bridge = TimerBridge(controller)
    forwarded = []
    notifier = BridgingNotifier(bridge, forwarded.append)
    with qtbot.waitSignal(bridge.session_completed) as blocker:
        notifier.notify_completion(TimerMode.BREAK)
    assert blocker.args == ["BREAK"]
    assert forwarded == [TimerMode.BREAK]


def test_dashboard_buttons_drive_controller(qtbot, controller, ticker):
    bridge = TimerBridge(controller)
    page = DashboardPage(controller, bridge)
    qtbot.addWidget(page)
    assert page.timer_label.text() == "01:00"
    assert page.btn_toggle.text() == "Start"

    page.btn_toggle.click()
    assert controller.current_state is TimerMode.WORK
    assert page.btn_toggle.text() == "Pause"
    ticker.fire(5)
    assert page.timer_label.text() == "00:55"

    page.btn_toggle.click()
    assert controller.current_state is TimerMode.PAUSED
    assert page.btn_toggle.text() == "Resume"

    page.btn_skip.click()
    assert controller.current_state is TimerMode.IDLE
    assert len(controller.history) == 1
    assert page.mode_label.text() == "Break"


def test_idle_preview_follows_pending(controller):
    assert idle_preview(controller) == (60, "Focus")
    controller.set_pending_session_type(TimerMode.BREAK)
    assert idle_preview(controller) == (60, "Break")
