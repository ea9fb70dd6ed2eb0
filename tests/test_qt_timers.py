import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QObject, QTimer
from PySide6.QtWidgets import QApplication

from fakes import FakeSurface, make_services, ready_runtime
from vbrowser.browser.manager import SessionManager
from vbrowser_qt.timers import QtIntervalTimer, qt_timer_factory


def _ensure_app():
    return QApplication.instance() or QApplication([])


def test_closed_timer_leaves_parent_and_stops():
    _ensure_app()
    owner = QObject()
    ticks = []
    timer = QtIntervalTimer(500, lambda: ticks.append(1), owner)
    timer.start()
    assert timer.is_active()

    timer.close()
    timer.close()

    assert timer.is_active() is False
    assert owner.findChildren(QTimer) == []


def test_closed_sessions_release_their_poll_timers():
    _ensure_app()
    owner = QObject()
    manager = SessionManager(
        surface_factory=lambda _session_id: FakeSurface(),
        services_factory=make_services,
        timer_factory=qt_timer_factory(owner),
        runtime_probe=ready_runtime,
    )

    session_ids = [manager.create_session() for _ in range(5)]
    assert len(owner.findChildren(QTimer)) == 5

    for session_id in session_ids:
        manager.close_session(session_id)

    assert owner.findChildren(QTimer) == []
