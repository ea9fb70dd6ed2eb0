"""Surface lifecycle and state-synchronisation core."""

from vbrowser.browser.client import ClientPhase, ClientState, SessionClient, SurfacePhase
from vbrowser.browser.errors import (
    BrowserRuntimeError,
    DependencyFailureError,
    InvalidSurfaceError,
    NotReadyError,
    ObservationReadError,
    UnsupportedEnvironmentError,
)
from vbrowser.browser.events import Notification, SurfaceEvent, should_forward
from vbrowser.browser.manager import Session, SessionManager
from vbrowser.browser.navigation import resolve_destination
from vbrowser.browser.runtime import (
    BrowserRuntimeInfo,
    BrowserRuntimeStatus,
    detect_browser_runtime,
)
from vbrowser.browser.services import ProxyServices, build_services

__all__ = [
    "BrowserRuntimeError",
    "BrowserRuntimeInfo",
    "BrowserRuntimeStatus",
    "ClientPhase",
    "ClientState",
    "DependencyFailureError",
    "InvalidSurfaceError",
    "Notification",
    "NotReadyError",
    "ObservationReadError",
    "ProxyServices",
    "Session",
    "SessionClient",
    "SessionManager",
    "SurfaceEvent",
    "SurfacePhase",
    "UnsupportedEnvironmentError",
    "build_services",
    "detect_browser_runtime",
    "resolve_destination",
    "should_forward",
]
