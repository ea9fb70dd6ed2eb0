import logging
import os

from PySide6.QtWebEngineCore import QWebEnginePage

from vbrowser_qt.constants import JS_CONSOLE_DEBUG_ENV
from vbrowser_qt.webview_utils import is_js_noise_message, is_local_console_source


logger = logging.getLogger(__name__)

_CONSOLE_LOG_LEVELS = {
    QWebEnginePage.JavaScriptConsoleMessageLevel.InfoMessageLevel: logging.DEBUG,
    QWebEnginePage.JavaScriptConsoleMessageLevel.WarningMessageLevel: logging.INFO,
    QWebEnginePage.JavaScriptConsoleMessageLevel.ErrorMessageLevel: logging.WARNING,
}


class SurfacePage(QWebEnginePage):
    """Page for one surface: routes console output to logging, keeps popups in place."""

    def __init__(self, surface_id, parent=None):
        super().__init__(parent)
        self.surface_id = surface_id
        self._verbose_console = os.getenv(JS_CONSOLE_DEBUG_ENV, "").strip() == "1"

    def javaScriptConsoleMessage(self, level, message, line_number, source_id):
        if not self._verbose_console:
            # Proxied sites are noisy; only local errors are worth surfacing.
            if is_js_noise_message(message) or not is_local_console_source(source_id):
                return
            if level != QWebEnginePage.JavaScriptConsoleMessageLevel.ErrorMessageLevel:
                return
        logger.log(
            _CONSOLE_LOG_LEVELS.get(level, logging.DEBUG),
            "[%s] %s (%s:%s)",
            self.surface_id,
            message,
            source_id,
            line_number,
        )

    def createWindow(self, _window_type):
        # target=_blank and window.open navigate the current surface.
        return self


__all__ = ["SurfacePage"]
