from PySide6.QtCore import QUrl
from PySide6.QtWebEngineWidgets import QWebEngineView

from vbrowser.browser.errors import ObservationReadError
from vbrowser_qt.webview_page import SurfacePage


class WebEngineSurface:
    """Qt WebEngine view exposed through the display surface contract."""

    def __init__(self, surface_id, parent=None):
        self.surface_id = surface_id
        self.is_destroyed = False
        self.view = QWebEngineView(parent)
        self.view.setObjectName(surface_id)
        self.page = SurfacePage(surface_id, self.view)
        self.view.setPage(self.page)
        self._ready_state = "complete"
        self._unload_watch = None
        self.page.loadStarted.connect(self._on_load_started)
        self.page.loadFinished.connect(self._on_load_finished)

    def _on_load_started(self):
        self._ready_state = "loading"
        if callable(self._unload_watch):
            self._unload_watch()

    def _on_load_finished(self, _ok):
        self._ready_state = "complete"

    def _require_page(self):
        if self.is_destroyed:
            raise ObservationReadError(f"Surface {self.surface_id} was destroyed.")
        return self.page

    def load(self, url):
        self._require_page()
        self.view.load(QUrl(url))

    def current_url(self):
        return self._require_page().url().toString()

    def document_title(self):
        page = self._require_page()
        title = page.title() or ""
        # QWebEnginePage reports the URL as title when the document has none.
        url = page.url()
        if title in (url.toString(), url.toDisplayString()):
            return ""
        return title

    def favicon_url(self):
        return self._require_page().iconUrl().toString()

    def ready_state(self):
        self._require_page()
        return self._ready_state

    def connect_load_signals(self, on_started, on_finished):
        page = self._require_page()
        page.loadStarted.connect(on_started)
        page.loadFinished.connect(on_finished)

    def disconnect_load_signals(self, on_started, on_finished):
        page = self._require_page()
        page.loadStarted.disconnect(on_started)
        page.loadFinished.disconnect(on_finished)

    def attach_unload_watch(self, on_unload):
        self._require_page()
        self._unload_watch = on_unload

    def back(self):
        if not self.is_destroyed:
            self.view.back()

    def forward(self):
        if not self.is_destroyed:
            self.view.forward()

    def reload(self):
        if not self.is_destroyed:
            self.view.reload()

    def show(self):
        if not self.is_destroyed:
            self.view.show()

    def hide(self):
        if not self.is_destroyed:
            self.view.hide()

    def is_visible(self):
        return not self.is_destroyed and not self.view.isHidden()

    def destroy(self):
        if self.is_destroyed:
            return
        self.is_destroyed = True
        self._unload_watch = None
        self.view.stop()
        self.view.hide()
        self.view.setParent(None)
        self.page.deleteLater()
        self.view.deleteLater()


__all__ = ["WebEngineSurface"]
