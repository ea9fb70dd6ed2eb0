from PySide6.QtCore import QTimer


class QtIntervalTimer:
    def __init__(self, interval_ms, callback, parent=None):
        self._timer = QTimer(parent)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(callback)

    def start(self):
        if self._timer is not None:
            self._timer.start()

    def stop(self):
        if self._timer is not None:
            self._timer.stop()

    def is_active(self):
        return self._timer is not None and self._timer.isActive()

    def close(self):
        # Unparented so the window does not keep one QTimer per closed tab.
        timer, self._timer = self._timer, None
        if timer is None:
            return
        timer.stop()
        timer.timeout.disconnect()
        timer.setParent(None)
        timer.deleteLater()


def qt_timer_factory(parent=None):
    def _create(interval_ms, callback):
        return QtIntervalTimer(interval_ms, callback, parent)

    return _create


def defer_to_event_loop(fn):
    QTimer.singleShot(0, fn)


__all__ = ["QtIntervalTimer", "defer_to_event_loop", "qt_timer_factory"]
