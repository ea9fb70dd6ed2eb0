from vbrowser.errors import ExternalServiceError


class BrowserRuntimeError(ExternalServiceError):
    """Base browser subsystem error."""


class UnsupportedEnvironmentError(BrowserRuntimeError):
    """Raised when the host cannot run the worker/isolation primitives."""


class DependencyFailureError(BrowserRuntimeError):
    """Raised when a setup step of a session client fails."""


class NotReadyError(BrowserRuntimeError):
    """Raised when navigation is requested before the client is ready."""


class InvalidSurfaceError(BrowserRuntimeError):
    """Raised when a handle is not a renderable display surface."""


class ObservationReadError(BrowserRuntimeError):
    """Raised by surfaces when the current document cannot be read."""


__all__ = [
    "BrowserRuntimeError",
    "DependencyFailureError",
    "InvalidSurfaceError",
    "NotReadyError",
    "ObservationReadError",
    "UnsupportedEnvironmentError",
]
