from vbrowser_qt.constants import QT_WINDOW_DEFAULT_GEOMETRY, QT_WINDOW_MIN_HEIGHT, QT_WINDOW_MIN_WIDTH


def parse_geometry(geometry, default=QT_WINDOW_DEFAULT_GEOMETRY):
    try:
        width_text, height_text = str(geometry).lower().split("x")
        width = max(QT_WINDOW_MIN_WIDTH, int(width_text))
        height = max(QT_WINDOW_MIN_HEIGHT, int(height_text))
    except (TypeError, ValueError):
        fallback_width, fallback_height = default.lower().split("x")
        width = max(QT_WINDOW_MIN_WIDTH, int(fallback_width))
        height = max(QT_WINDOW_MIN_HEIGHT, int(fallback_height))
    return width, height


class WindowStateMixin:
    def _restore_window_geometry(self):
        width, height = parse_geometry(self.config.get("qt_window_geometry", QT_WINDOW_DEFAULT_GEOMETRY))
        self.resize(width, height)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._toaster.reposition()

    def closeEvent(self, event):
        self.manager.dispose()
        self.config.set("qt_window_geometry", f"{self.width()}x{self.height()}")
        super().closeEvent(event)

    def _set_status(self, text):
        self.status_lbl.setText(text)


__all__ = ["WindowStateMixin", "parse_geometry"]
