"""Multi-surface controller ("virtual browser") over session clients."""

from dataclasses import dataclass
from functools import partial
import logging
from uuid import uuid4

from vbrowser.browser.client import SessionClient
from vbrowser.browser.errors import NotReadyError
from vbrowser.browser.events import (
    CLIENT_EVENTS,
    EventEmitter,
    Notification,
    SurfaceEvent,
    should_forward,
)
from vbrowser.browser.navigation import search_template_for
from vbrowser.browser.surface import call_now
from vbrowser.constants import (
    BLANK_URL,
    DEFAULT_SEARCH_ENGINE,
    NEW_TAB_TITLE,
    OBSERVATION_POLL_INTERVAL_MS,
    SEARCH_ENGINES,
    SURFACE_ID_PREFIX,
)


logger = logging.getLogger(__name__)

TAB_STRIP_EVENTS = (
    SurfaceEvent.TITLE_CHANGE,
    SurfaceEvent.FAVICON_CHANGE,
    SurfaceEvent.LOADING_START,
    SurfaceEvent.LOADING_STOP,
)


@dataclass(eq=False)
class Session:
    id: str
    surface: object
    client: SessionClient
    title: str = NEW_TAB_TITLE
    favicon: str = ""

    @property
    def loading(self) -> bool:
        return self.client.get_state().loading


class SessionManager:
    """Owns the open sessions and exposes one filtered event stream.

    Every notification is delivered to listeners as a ``Notification`` carrying
    the originating session id. Navigation and status traffic is forwarded
    only for the active session; title/favicon metadata is forwarded for all.
    """

    def __init__(
        self,
        surface_factory,
        services_factory,
        preferences=None,
        timer_factory=None,
        defer=None,
        runtime_probe=None,
        poll_interval_ms: int = OBSERVATION_POLL_INTERVAL_MS,
        search_templates=None,
        background=None,
    ) -> None:
        self._surface_factory = surface_factory
        self._background = background
        self._services_factory = services_factory
        self._preferences = preferences
        self._timer_factory = timer_factory
        self._defer = defer or call_now
        self._runtime_probe = runtime_probe
        self._poll_interval_ms = poll_interval_ms
        self._search_templates = SEARCH_ENGINES if search_templates is None else search_templates
        self._search_engine = preferences.get() if preferences is not None else DEFAULT_SEARCH_ENGINE
        self._sessions: dict[str, Session] = {}
        self._issued_ids: set[str] = set()
        self._active_id: str | None = None
        self._events = EventEmitter()

    # -- subscription -----------------------------------------------------

    def on(self, kind: SurfaceEvent, callback) -> None:
        self._events.on(kind, callback)

    def off(self, kind: SurfaceEvent, callback) -> None:
        self._events.off(kind, callback)

    def _publish(self, kind: SurfaceEvent, payload=None, session_id: str | None = None) -> None:
        self._events.emit(kind, Notification(kind=kind, payload=payload, session_id=session_id))

    # -- queries --------------------------------------------------------------

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active_session(self) -> Session | None:
        if self._active_id is None:
            return None
        return self._sessions.get(self._active_id)

    @property
    def sessions(self) -> list[Session]:
        return list(self._sessions.values())

    @property
    def search_engine(self) -> str:
        return self._search_engine

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions

    # -- lifecycle ------------------------------------------------------------

    def create_session(self, initial_url: str = BLANK_URL) -> str:
        session_id = self._new_id()
        surface = self._surface_factory(session_id)
        surface.hide()

        client = SessionClient(
            self._services_factory(),
            search_engine=self._search_engine,
            timer_factory=self._timer_factory,
            poll_interval_ms=self._poll_interval_ms,
            runtime_probe=self._runtime_probe,
            search_templates=self._search_templates,
            background=self._background,
        )
        client.set_display_surface(surface)
        session = Session(id=session_id, surface=surface, client=client)
        self._bind_session_events(session_id, client)

        target_url = (initial_url or "").strip()
        if target_url and target_url != BLANK_URL:
            client.on(SurfaceEvent.READY, partial(self._navigate_when_ready, session, target_url))

        self._sessions[session_id] = session
        self._publish(SurfaceEvent.SURFACE_CREATED, session, session_id)
        if self._active_id is None:
            self.switch_session(session_id)

        self._defer(client.initialize)
        return session_id

    def _navigate_when_ready(self, session: Session, url: str, _payload=None) -> None:
        if self._sessions.get(session.id) is not session:
            return
        try:
            session.client.navigate(url)
        except NotReadyError as exc:
            logger.warning("Initial navigation for %s skipped: %s", session.id, exc)

    def switch_session(self, session_id: str) -> None:
        session = self._sessions.get(session_id)
        if session is None:
            return

        current = self.active_session
        if current is not None and current is not session:
            current.surface.hide()
        if not session.surface.is_visible():
            session.surface.show()
        self._active_id = session_id

        self._publish(SurfaceEvent.SURFACE_CHANGE, session, session_id)
        state = session.client.get_state()
        self._publish(SurfaceEvent.STATUS_CHANGE, state, session_id)
        if state.loading:
            self._publish(SurfaceEvent.LOADING_START, None, session_id)
        else:
            self._publish(SurfaceEvent.LOADING_STOP, None, session_id)

    def close_session(self, session_id: str) -> None:
        session = self._sessions.get(session_id)
        if session is None:
            return

        session.client.teardown()
        try:
            session.surface.destroy()
        except Exception as exc:
            logger.warning("Destroying surface %s failed: %s", session_id, exc)
        del self._sessions[session_id]
        self._publish(SurfaceEvent.SURFACE_CLOSED, session_id, session_id)

        if self._active_id != session_id:
            return
        self._active_id = None
        if self._sessions:
            self.switch_session(next(iter(self._sessions)))
        else:
            self._publish(SurfaceEvent.SURFACE_CHANGE, None, None)

    def dispose(self) -> None:
        for session_id in list(self._sessions):
            self.close_session(session_id)

    # -- active-session proxies ------------------------------------------------

    def navigate(self, raw_input: str) -> str | None:
        session = self.active_session
        if session is None:
            return None
        return session.client.navigate(raw_input)

    def go_back(self) -> None:
        session = self.active_session
        if session is not None:
            session.client.go_back()

    def go_forward(self) -> None:
        session = self.active_session
        if session is not None:
            session.client.go_forward()

    def reload(self) -> None:
        session = self.active_session
        if session is not None:
            session.client.reload_surface()

    def set_search_engine(self, engine_id: str) -> None:
        search_template_for(engine_id, self._search_templates)
        if self._preferences is not None:
            self._preferences.set(engine_id)
        self._search_engine = engine_id
        for session in self._sessions.values():
            session.client.set_search_engine(engine_id)

    # -- internals ------------------------------------------------------------

    def _new_id(self) -> str:
        # Ids of closed sessions stay reserved; an id is never issued twice.
        while True:
            session_id = f"{SURFACE_ID_PREFIX}{uuid4().hex[:10]}"
            if session_id not in self._issued_ids:
                self._issued_ids.add(session_id)
                return session_id

    def _bind_session_events(self, session_id: str, client: SessionClient) -> None:
        for kind in CLIENT_EVENTS:
            client.on(kind, partial(self._on_client_event, session_id, kind))

    def _on_client_event(self, session_id: str, kind: SurfaceEvent, payload=None) -> None:
        session = self._sessions.get(session_id)
        if session is None:
            return

        if kind == SurfaceEvent.TITLE_CHANGE:
            session.title = payload
        elif kind == SurfaceEvent.FAVICON_CHANGE:
            session.favicon = payload
        if kind in TAB_STRIP_EVENTS:
            self._publish(SurfaceEvent.SURFACE_UPDATE, session, session_id)

        if should_forward(kind, session_id, self._active_id):
            self._publish(kind, payload, session_id)


__all__ = ["Session", "SessionManager"]
