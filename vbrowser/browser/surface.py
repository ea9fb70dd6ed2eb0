"""Display surface and scheduling contracts consumed by the session core.

A display surface is an isolated, navigable rendering region. The core never
depends on a rendering technology; it only calls the methods listed in
``SURFACE_METHODS``. Reads may raise ``ObservationReadError`` (or anything
else) while a document is detached or cross-origin.
"""

from collections.abc import Callable
import traceback
from typing import Any, Protocol

from vbrowser.browser.errors import InvalidSurfaceError


SURFACE_METHODS = (
    "load",
    "current_url",
    "document_title",
    "favicon_url",
    "ready_state",
    "connect_load_signals",
    "disconnect_load_signals",
    "attach_unload_watch",
    "back",
    "forward",
    "reload",
    "show",
    "hide",
    "is_visible",
    "destroy",
)


class DisplaySurface(Protocol):
    is_destroyed: bool

    def load(self, url: str) -> None: ...

    def current_url(self) -> str: ...

    def document_title(self) -> str: ...

    def favicon_url(self) -> str: ...

    def ready_state(self) -> str: ...

    def connect_load_signals(self, on_started: Callable[[], None], on_finished: Callable[[], None]) -> None: ...

    def disconnect_load_signals(self, on_started: Callable[[], None], on_finished: Callable[[], None]) -> None: ...

    def attach_unload_watch(self, on_unload: Callable[[], None]) -> None: ...

    def back(self) -> None: ...

    def forward(self) -> None: ...

    def reload(self) -> None: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def is_visible(self) -> bool: ...

    def destroy(self) -> None: ...


class IntervalTimer(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...

    def is_active(self) -> bool: ...

    def close(self) -> None: ...


TimerFactory = Callable[[int, Callable[[], None]], IntervalTimer]
Defer = Callable[[Callable[[], None]], None]
Background = Callable[[Callable[[], Any], Callable[[Any], None], Callable[[str], None]], None]


def is_renderable_surface(handle) -> bool:
    if handle is None or getattr(handle, "is_destroyed", False):
        return False
    return all(callable(getattr(handle, name, None)) for name in SURFACE_METHODS)


def require_surface(handle) -> "DisplaySurface":
    if not is_renderable_surface(handle):
        raise InvalidSurfaceError(f"Not a renderable display surface: {handle!r}")
    return handle


class ManualTimer:
    """Timer that only fires when ``fire`` is called.

    Used where no event loop drives the core, such as headless embedding.
    """

    def __init__(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self._active = False
        self.stop_calls = 0
        self.closed = False

    def start(self) -> None:
        self._active = True

    def stop(self) -> None:
        self._active = False
        self.stop_calls += 1

    def is_active(self) -> bool:
        return self._active

    def close(self) -> None:
        self._active = False
        self.closed = True

    def fire(self) -> None:
        if self._active:
            self.callback()


def call_now(fn: Callable[[], None]) -> None:
    fn()


def run_inline(fn, on_result, on_error) -> None:
    """Run ``fn`` on the calling thread with the same callback contract as a worker pool."""
    try:
        result = fn()
    except Exception:
        on_error(traceback.format_exc())
        return
    on_result(result)


__all__ = [
    "SURFACE_METHODS",
    "Background",
    "Defer",
    "DisplaySurface",
    "IntervalTimer",
    "ManualTimer",
    "TimerFactory",
    "call_now",
    "is_renderable_surface",
    "require_surface",
    "run_inline",
]
