import logging

from vbrowser.browser.errors import NotReadyError
from vbrowser.browser.events import SurfaceEvent
from vbrowser.constants import APP_NAME, BLANK_URL
from vbrowser.errors import ValidationError
from vbrowser_qt.surface import WebEngineSurface
from vbrowser_qt.webview_utils import tab_label


logger = logging.getLogger(__name__)

STATUS_TEXT = {
    "UNINITIALIZED": "Starting...",
    "INITIALIZING": "Connecting proxy...",
    "READY": "Ready",
    "ERRORED": "Proxy unavailable",
}


class SurfaceTabsMixin:
    """Wires the tab strip and navigation bar to the session manager."""

    def _create_surface(self, session_id):
        surface = WebEngineSurface(session_id, parent=self.surface_host)
        self.surface_layout.addWidget(surface.view)
        return surface

    def _connect_manager(self):
        handlers = {
            SurfaceEvent.SURFACE_CREATED: self._on_surface_created,
            SurfaceEvent.SURFACE_CHANGE: self._on_surface_change,
            SurfaceEvent.SURFACE_CLOSED: self._on_surface_closed,
            SurfaceEvent.SURFACE_UPDATE: self._on_surface_update,
            SurfaceEvent.NAVIGATING: self._on_navigating,
            SurfaceEvent.URL_CHANGE: self._on_url_change,
            SurfaceEvent.TITLE_CHANGE: self._on_title_change,
            SurfaceEvent.STATUS_CHANGE: self._on_status_change,
            SurfaceEvent.LOADING_START: self._on_loading_start,
            SurfaceEvent.LOADING_STOP: self._on_loading_stop,
            SurfaceEvent.ERROR: self._on_session_error,
        }
        for kind, handler in handlers.items():
            self.manager.on(kind, handler)

    def _connect_controls(self):
        self.tab_bar.currentChanged.connect(self._on_tab_selected)
        self.tab_bar.tabCloseRequested.connect(self._on_tab_close_requested)
        self.new_tab_btn.clicked.connect(self._open_new_tab)
        self.back_btn.clicked.connect(self.manager.go_back)
        self.forward_btn.clicked.connect(self.manager.go_forward)
        self.reload_btn.clicked.connect(self.manager.reload)
        self.address_input.returnPressed.connect(self._on_address_submitted)
        self.search_engine_combo.currentIndexChanged.connect(self._on_search_engine_selected)

    # -- tab strip ------------------------------------------------------------

    def _tab_index(self, session_id):
        for index in range(self.tab_bar.count()):
            if self.tab_bar.tabData(index) == session_id:
                return index
        return -1

    def _on_surface_created(self, notification):
        session = notification.payload
        self.empty_lbl.hide()
        self._syncing_tabs = True
        try:
            index = self.tab_bar.addTab(tab_label(session.title))
            self.tab_bar.setTabData(index, session.id)
        finally:
            self._syncing_tabs = False

    def _on_surface_change(self, notification):
        session = notification.payload
        if session is None:
            self.address_input.clear()
            self.setWindowTitle(APP_NAME)
            self.loading_bar.hide()
            self.empty_lbl.show()
            return
        index = self._tab_index(session.id)
        if index >= 0 and self.tab_bar.currentIndex() != index:
            self._syncing_tabs = True
            try:
                self.tab_bar.setCurrentIndex(index)
            finally:
                self._syncing_tabs = False
        state = session.client.get_state()
        self.address_input.setText(self._display_url(session, state.last_known_url))
        self.setWindowTitle(f"{session.title} - {APP_NAME}")

    def _on_surface_closed(self, notification):
        index = self._tab_index(notification.payload)
        if index < 0:
            return
        self._syncing_tabs = True
        try:
            self.tab_bar.removeTab(index)
        finally:
            self._syncing_tabs = False

    def _on_surface_update(self, notification):
        session = notification.payload
        index = self._tab_index(session.id)
        if index < 0:
            return
        self.tab_bar.setTabText(index, tab_label(session.title, loading=session.loading))
        self.tab_bar.setTabToolTip(index, session.favicon or session.title)

    def _on_tab_selected(self, index):
        if self._syncing_tabs or index < 0:
            return
        self.manager.switch_session(self.tab_bar.tabData(index))

    def _on_tab_close_requested(self, index):
        self.manager.close_session(self.tab_bar.tabData(index))

    def _open_new_tab(self, _checked=False):
        return self.manager.create_session(self.config.get("home_url") or BLANK_URL)

    # -- active session stream --------------------------------------------------

    @staticmethod
    def _display_url(session, url):
        if not url or url == BLANK_URL:
            return ""
        return session.client.decode(url)

    def _on_navigating(self, notification):
        self._set_status(f"Opening {notification.payload['original']}")

    def _on_url_change(self, notification):
        decoded = notification.payload["decoded"]
        self.address_input.setText("" if decoded == BLANK_URL else decoded)

    def _on_title_change(self, notification):
        if notification.session_id == self.manager.active_id:
            self.setWindowTitle(f"{notification.payload} - {APP_NAME}")

    def _on_status_change(self, notification):
        state = notification.payload
        self._set_status(state.error or STATUS_TEXT.get(state.phase.value, state.phase.value))

    def _on_loading_start(self, _notification):
        self.loading_bar.show()

    def _on_loading_stop(self, _notification):
        self.loading_bar.hide()

    def _on_session_error(self, notification):
        logger.error("Session %s failed: %s", notification.session_id, notification.payload)
        self._toaster.show_error(notification.payload, prefix="Tab failed to start")

    # -- commands -------------------------------------------------------------

    def _on_address_submitted(self):
        text = self.address_input.text().strip()
        if not text:
            return
        if self.manager.active_session is None:
            self.manager.create_session(text)
            return
        try:
            self.manager.navigate(text)
        except NotReadyError:
            self._toaster.show("This tab is still connecting. Try again in a moment.", kind="warning")

    def _on_search_engine_selected(self, index):
        engine_id = self.search_engine_combo.itemData(index)
        if not engine_id or engine_id == self.manager.search_engine:
            return
        try:
            self.manager.set_search_engine(engine_id)
        except ValidationError as exc:
            self._toaster.show_error(exc)


__all__ = ["STATUS_TEXT", "SurfaceTabsMixin"]
