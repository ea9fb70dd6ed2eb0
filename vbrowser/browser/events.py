"""Notification kinds, the forwarding predicate and a small pub/sub registry."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any


logger = logging.getLogger(__name__)


class SurfaceEvent(str, Enum):
    SURFACE_CREATED = "surfaceCreated"
    SURFACE_CHANGE = "surfaceChange"
    SURFACE_CLOSED = "surfaceClosed"
    SURFACE_UPDATE = "surfaceUpdate"
    READY = "ready"
    ERROR = "error"
    NAVIGATING = "navigating"
    URL_CHANGE = "urlChange"
    TITLE_CHANGE = "titleChange"
    FAVICON_CHANGE = "faviconChange"
    STATUS_CHANGE = "statusChange"
    LOADING_START = "loadingStart"
    LOADING_STOP = "loadingStop"


CLIENT_EVENTS = (
    SurfaceEvent.READY,
    SurfaceEvent.ERROR,
    SurfaceEvent.NAVIGATING,
    SurfaceEvent.URL_CHANGE,
    SurfaceEvent.TITLE_CHANGE,
    SurfaceEvent.FAVICON_CHANGE,
    SurfaceEvent.STATUS_CHANGE,
    SurfaceEvent.LOADING_START,
    SurfaceEvent.LOADING_STOP,
)

PASSIVE_EVENTS = frozenset(
    {
        SurfaceEvent.TITLE_CHANGE,
        SurfaceEvent.FAVICON_CHANGE,
        SurfaceEvent.SURFACE_UPDATE,
    }
)

ACTIVE_ONLY_EVENTS = frozenset(
    {
        SurfaceEvent.NAVIGATING,
        SurfaceEvent.URL_CHANGE,
        SurfaceEvent.STATUS_CHANGE,
        SurfaceEvent.LOADING_START,
        SurfaceEvent.LOADING_STOP,
        SurfaceEvent.READY,
        SurfaceEvent.ERROR,
    }
)


def is_passive(kind: SurfaceEvent) -> bool:
    return kind in PASSIVE_EVENTS


def should_forward(kind: SurfaceEvent, origin_id: str | None, active_id: str | None) -> bool:
    """Decide whether a session's notification reaches the host UI.

    Passive metadata is always forwarded so background tabs stay current.
    Everything else is forwarded only for the active session.
    """
    if kind in PASSIVE_EVENTS:
        return True
    if kind in ACTIVE_ONLY_EVENTS:
        return origin_id is not None and origin_id == active_id
    return False


@dataclass(frozen=True)
class Notification:
    kind: SurfaceEvent
    payload: Any = None
    session_id: str | None = None


Listener = Callable[[Any], None]


class EventEmitter:
    """Per-instance ``on``/``off``/``emit`` registry."""

    def __init__(self) -> None:
        self._listeners: dict[SurfaceEvent, list[Listener]] = {}

    def on(self, kind: SurfaceEvent, callback: Listener) -> None:
        self._listeners.setdefault(SurfaceEvent(kind), []).append(callback)

    def off(self, kind: SurfaceEvent, callback: Listener) -> None:
        callbacks = self._listeners.get(SurfaceEvent(kind))
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def clear(self) -> None:
        self._listeners.clear()

    def listener_count(self, kind: SurfaceEvent) -> int:
        return len(self._listeners.get(SurfaceEvent(kind), ()))

    def emit(self, kind: SurfaceEvent, payload: Any = None) -> None:
        for callback in list(self._listeners.get(kind, ())):
            try:
                callback(payload)
            except Exception:
                logger.exception("Listener for %s failed", kind.value)


__all__ = [
    "ACTIVE_ONLY_EVENTS",
    "CLIENT_EVENTS",
    "EventEmitter",
    "Notification",
    "PASSIVE_EVENTS",
    "SurfaceEvent",
    "is_passive",
    "should_forward",
]
