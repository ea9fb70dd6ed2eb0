from collections.abc import Callable

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QMainWindow, QWidget

from vbrowser_qt.constants import (
    TOAST_DEFAULT_DURATION_MS,
    TOAST_ERROR_DURATION_MS,
    TOAST_LAYOUT_MARGINS,
    TOAST_LAYOUT_SPACING,
    TOAST_MARGIN_PX,
    TOAST_TOP_OFFSET_PX,
)


def describe_error(error) -> str:
    if error is None:
        return "Unknown error."
    if isinstance(error, BaseException):
        text = str(error) or type(error).__name__
        return text.splitlines()[0]
    return str(error)


class Toaster:
    """Transient notice anchored to the top-right of the browser window."""

    def __init__(self, parent: QMainWindow, get_top_offset: Callable[[], int]) -> None:
        self.parent = parent
        self.get_top_offset = get_top_offset
        self._frame = None
        self._label = None
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)

    def build(self, container: QWidget) -> None:
        self._frame = QFrame(container)
        self._frame.setObjectName("toastFrame")
        layout = QHBoxLayout(self._frame)
        layout.setContentsMargins(*TOAST_LAYOUT_MARGINS)
        layout.setSpacing(TOAST_LAYOUT_SPACING)
        self._label = QLabel("")
        self._label.setObjectName("toastLabel")
        self._label.setWordWrap(True)
        layout.addWidget(self._label, 1)
        self._frame.hide()

    def reposition(self) -> None:
        container = self.parent.centralWidget()
        if self._frame is None or not container:
            return
        self._frame.adjustSize()
        x = max(TOAST_MARGIN_PX, container.width() - self._frame.width() - TOAST_MARGIN_PX)
        y = max(TOAST_MARGIN_PX, self.get_top_offset() + TOAST_TOP_OFFSET_PX)
        self._frame.move(x, y)

    def show(self, message: str, kind: str = "info", duration_ms: int = TOAST_DEFAULT_DURATION_MS) -> None:
        if self._frame is None or self._label is None:
            return
        self._frame.setProperty("toastKind", kind)
        self._label.setText(message)
        self.reposition()
        self._frame.show()
        self._frame.raise_()
        self._timer.start(duration_ms)

    def show_error(self, error, prefix: str = "") -> None:
        message = describe_error(error)
        if prefix:
            message = f"{prefix}: {message}"
        self.show(message, kind="error", duration_ms=TOAST_ERROR_DURATION_MS)

    def hide(self) -> None:
        if self._frame is not None:
            self._frame.hide()


__all__ = ["Toaster", "describe_error"]
