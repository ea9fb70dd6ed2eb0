from PySide6.QtWidgets import QMainWindow

from vbrowser.browser.manager import SessionManager
from vbrowser.browser.services import build_services
from vbrowser.constants import BLANK_URL
from vbrowser.infra.config_store import Config, SearchEnginePreference
from vbrowser_qt.helpers.toaster import Toaster
from vbrowser_qt.helpers.worker_manager import WorkerManager
from vbrowser_qt.mixins import LayoutMixin, SurfaceTabsMixin, WindowStateMixin
from vbrowser_qt.timers import defer_to_event_loop, qt_timer_factory


class BrowserWindow(
    LayoutMixin,
    SurfaceTabsMixin,
    WindowStateMixin,
    QMainWindow,
):
    def __init__(self, config=None, initial_urls=()):
        super().__init__()
        self.config = config or Config()
        self.preferences = SearchEnginePreference(self.config)
        self._syncing_tabs = False
        self._toaster = Toaster(self, lambda: self._nav_bar.geometry().bottom())

        self._build_ui()
        self.workers = WorkerManager()
        self.manager = SessionManager(
            surface_factory=self._create_surface,
            services_factory=lambda: build_services(self.config),
            preferences=self.preferences,
            timer_factory=qt_timer_factory(self),
            defer=defer_to_event_loop,
            background=self.workers.submit,
        )
        self._connect_manager()
        self._select_search_engine(self.manager.search_engine)
        self._connect_controls()
        self._restore_window_geometry()

        if self.config.load_error:
            self._toaster.show_error(self.config.load_error, prefix="Settings could not be loaded")

        urls = [url for url in initial_urls if url] or [self.config.get("home_url") or BLANK_URL]
        for url in urls:
            self.manager.create_session(url)

    def _select_search_engine(self, engine_id):
        index = self.search_engine_combo.findData(engine_id)
        if index >= 0:
            self.search_engine_combo.setCurrentIndex(index)


__all__ = ["BrowserWindow"]
