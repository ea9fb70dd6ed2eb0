"""One proxied browsing session: service wiring, readiness and surface observation."""

from dataclasses import dataclass, replace
from enum import Enum
import logging

from vbrowser.browser.errors import (
    DependencyFailureError,
    NotReadyError,
    UnsupportedEnvironmentError,
)
from vbrowser.browser.events import EventEmitter, SurfaceEvent
from vbrowser.browser.navigation import resolve_destination, search_template_for
from vbrowser.browser.runtime import BrowserRuntimeStatus, detect_browser_runtime
from vbrowser.browser.surface import ManualTimer, require_surface, run_inline
from vbrowser.constants import (
    DEFAULT_ENGINE,
    DEFAULT_SEARCH_ENGINE,
    DOCUMENT_READY_COMPLETE,
    OBSERVATION_POLL_INTERVAL_MS,
    SEARCH_ENGINES,
    WORKER_SCOPE,
    WORKER_TYPE,
)


logger = logging.getLogger(__name__)

_UNREADABLE = object()


class ClientPhase(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    INITIALIZING = "INITIALIZING"
    READY = "READY"
    ERRORED = "ERRORED"


class SurfacePhase(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    LOADED = "LOADED"


@dataclass(frozen=True)
class ClientState:
    phase: ClientPhase = ClientPhase.UNINITIALIZED
    initialized: bool = False
    ready: bool = False
    loading: bool = False
    engine: str = DEFAULT_ENGINE
    search_engine: str = DEFAULT_SEARCH_ENGINE
    worker_registered: bool = False
    last_known_url: str = ""
    last_known_title: str = ""
    last_known_favicon: str = ""
    error: str | None = None


class SessionClient:
    """Drives one display surface through the proxy services.

    Setup runs once through ``initialize``. The network-bound steps go through
    the ``background`` runner, which reports back on the caller's thread. After
    that the client navigates its bound surface and watches it two ways: load
    signals from the surface, and a polling loop that catches same-document
    navigation. Both detectors feed the same deduplicated emission path.
    """

    def __init__(
        self,
        services,
        search_engine: str = DEFAULT_SEARCH_ENGINE,
        timer_factory=None,
        poll_interval_ms: int = OBSERVATION_POLL_INTERVAL_MS,
        runtime_probe=None,
        search_templates=None,
        background=None,
    ) -> None:
        self._services = services
        self._background = background or run_inline
        self._search_templates = SEARCH_ENGINES if search_templates is None else search_templates
        self._search_template = search_template_for(search_engine, self._search_templates)
        self._timer_factory = timer_factory or ManualTimer
        self._poll_interval_ms = poll_interval_ms
        self._runtime_probe = runtime_probe or detect_browser_runtime
        self._state = ClientState(
            engine=getattr(services, "engine", DEFAULT_ENGINE),
            search_engine=search_engine,
        )
        self._events = EventEmitter()
        self._surface = None
        self._poll_timer = None
        self._surface_phase = SurfacePhase.IDLE
        self._torn_down = False

    # -- subscription -----------------------------------------------------

    def on(self, kind: SurfaceEvent, callback) -> None:
        self._events.on(kind, callback)

    def off(self, kind: SurfaceEvent, callback) -> None:
        self._events.off(kind, callback)

    def _emit(self, kind: SurfaceEvent, payload=None) -> None:
        if self._torn_down:
            return
        self._events.emit(kind, payload)

    # -- state --------------------------------------------------------------

    def get_state(self) -> ClientState:
        return self._state

    @property
    def surface(self):
        return self._surface

    @property
    def surface_phase(self) -> SurfacePhase:
        return self._surface_phase

    @property
    def search_template(self) -> str:
        return self._search_template

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def _update_state(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        self._emit(SurfaceEvent.STATUS_CHANGE, self._state)

    def _remember(self, **changes) -> None:
        # Dedup memory only; not a status change.
        self._state = replace(self._state, **changes)

    def set_search_engine(self, engine_id: str) -> None:
        self._search_template = search_template_for(engine_id, self._search_templates)
        self._update_state(search_engine=engine_id)

    # -- setup ----------------------------------------------------------------

    def initialize(self) -> None:
        if self._state.initialized:
            return
        self._update_state(initialized=True, phase=ClientPhase.INITIALIZING)

        try:
            runtime_info = self._runtime_probe()
        except Exception as exc:
            self._fail(UnsupportedEnvironmentError(f"Runtime check failed: {exc}"))
            return
        if runtime_info.status != BrowserRuntimeStatus.READY:
            self._fail(
                UnsupportedEnvironmentError(
                    f"{runtime_info.detail} (status={runtime_info.status.value}, engine={runtime_info.engine})"
                )
            )
            return

        self._background(self._setup_services, self._on_setup_finished, self._on_setup_crashed)

    def _setup_services(self) -> Exception | None:
        # Runs through the background runner; touches services only, never state or listeners.
        services = self._services
        try:
            services.load_dependencies()
            bootstrap = services.bootstrap_worker()
            connection = services.transport_factory(bootstrap.script_url)
            connection.set_transport(services.transport_url(), [{"wisp": services.wisp_url}])
            logger.info("Transport configured for %s", services.wisp_url)
            services.worker.register(services.worker_script_url(), scope=WORKER_SCOPE, type=WORKER_TYPE)
            services.worker.wait_ready()
        except Exception as exc:
            return exc
        return None

    def _on_setup_finished(self, failure: Exception | None) -> None:
        if self._torn_down:
            return
        if failure is not None:
            self._fail(DependencyFailureError(f"Client setup failed: {failure}"), cause=failure)
            return
        self._update_state(worker_registered=True, ready=True, phase=ClientPhase.READY, error=None)
        self._emit(SurfaceEvent.READY)

    def _on_setup_crashed(self, trace_text: str) -> None:
        if self._torn_down:
            return
        lines = [line for line in (trace_text or "").splitlines() if line.strip()]
        summary = lines[-1] if lines else "unknown error"
        self._fail(DependencyFailureError(f"Client setup failed: {summary}"))

    def _fail(self, error: Exception, cause: Exception | None = None) -> None:
        if cause is not None:
            error.__cause__ = cause
        logger.error("Session client setup failed: %s", error)
        self._update_state(phase=ClientPhase.ERRORED, ready=False, loading=False, error=str(error))
        self._emit(SurfaceEvent.ERROR, error)

    # -- commands -------------------------------------------------------------

    def navigate(self, raw_input: str) -> str:
        if not self._state.ready:
            raise NotReadyError("Client not ready")
        destination = resolve_destination(raw_input, self._search_template)
        encoded = self._services.rewriter.encode(destination)

        self._begin_loading()
        self._emit(SurfaceEvent.NAVIGATING, {"original": raw_input, "encoded": encoded})
        if self._surface is not None:
            self._surface.load(encoded)
        return encoded

    def decode(self, encoded_url: str) -> str:
        if not self._state.ready:
            return encoded_url
        try:
            return self._services.rewriter.decode(encoded_url)
        except Exception as exc:
            logger.debug("Could not decode %s: %s", encoded_url, exc)
            return encoded_url

    def go_back(self) -> None:
        if self._surface is not None:
            self._surface.back()

    def go_forward(self) -> None:
        if self._surface is not None:
            self._surface.forward()

    def reload_surface(self) -> None:
        if self._surface is not None:
            self._surface.reload()

    # -- surface binding ------------------------------------------------------

    def set_display_surface(self, handle) -> None:
        surface = require_surface(handle)
        self._detach_surface()

        self._surface = surface
        self._surface_phase = SurfacePhase.IDLE
        surface.connect_load_signals(self._on_surface_load_started, self._on_surface_load_finished)
        self._watch_unload(surface)
        self._poll_timer = self._timer_factory(self._poll_interval_ms, self._poll_surface)
        self._poll_timer.start()

    def teardown(self) -> None:
        self._detach_surface()
        self._torn_down = True
        self._events.clear()

    def _detach_surface(self) -> None:
        timer, self._poll_timer = self._poll_timer, None
        if timer is not None:
            timer.stop()
            timer.close()

        surface, self._surface = self._surface, None
        if surface is None or getattr(surface, "is_destroyed", False):
            return
        try:
            surface.disconnect_load_signals(self._on_surface_load_started, self._on_surface_load_finished)
        except Exception as exc:
            logger.debug("Could not disconnect surface signals: %s", exc)

    # -- observation ----------------------------------------------------------

    def _begin_loading(self) -> None:
        if self._state.loading or not self._state.ready:
            return
        self._surface_phase = SurfacePhase.LOADING
        self._update_state(loading=True)
        self._emit(SurfaceEvent.LOADING_START)

    def _finish_loading(self) -> None:
        self._surface_phase = SurfacePhase.LOADED
        if not self._state.loading:
            return
        self._update_state(loading=False)
        self._emit(SurfaceEvent.LOADING_STOP)

    def _on_surface_load_started(self) -> None:
        if self._torn_down:
            return
        self._begin_loading()

    def _on_surface_load_finished(self, *_args) -> None:
        surface = self._surface
        if surface is None or self._torn_down:
            return
        current_url = self._read(surface.current_url)
        if current_url is _UNREADABLE:
            return

        self._finish_loading()
        self._check_metadata(surface)
        self._check_url(current_url)
        self._watch_unload(surface)

    def _poll_surface(self) -> None:
        surface = self._surface
        if surface is None or self._torn_down:
            return
        self._check_metadata(surface)

        current_url = self._read(surface.current_url)
        if current_url is _UNREADABLE:
            return
        if self._check_url(current_url):
            self._watch_unload(surface)

        if self._state.loading and self._read(surface.ready_state) == DOCUMENT_READY_COMPLETE:
            self._finish_loading()

    def _check_metadata(self, surface) -> None:
        title = self._read(surface.document_title)
        if title is not _UNREADABLE:
            title = title or ""
            if title and title != self._state.last_known_title:
                self._remember(last_known_title=title)
                self._emit(SurfaceEvent.TITLE_CHANGE, title)

        favicon = self._read(surface.favicon_url)
        if favicon is not _UNREADABLE:
            favicon = favicon or ""
            if favicon != self._state.last_known_favicon:
                self._remember(last_known_favicon=favicon)
                self._emit(SurfaceEvent.FAVICON_CHANGE, favicon)

    def _check_url(self, current_url) -> bool:
        current_url = current_url or ""
        if current_url == self._state.last_known_url:
            return False
        self._remember(last_known_url=current_url)
        self._emit(SurfaceEvent.URL_CHANGE, {"original": current_url, "decoded": self.decode(current_url)})
        return True

    def _watch_unload(self, surface) -> None:
        try:
            surface.attach_unload_watch(self._on_surface_load_started)
        except Exception as exc:
            logger.debug("Unload watch not attached: %s", exc)

    @staticmethod
    def _read(reader):
        try:
            return reader()
        except Exception as exc:
            logger.debug("Surface read skipped: %s", exc)
            return _UNREADABLE


__all__ = ["ClientPhase", "ClientState", "SessionClient", "SurfacePhase"]
