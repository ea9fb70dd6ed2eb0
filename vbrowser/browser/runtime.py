from dataclasses import dataclass
from enum import Enum
import importlib


class BrowserRuntimeStatus(str, Enum):
    READY = "READY"
    MISSING_RUNTIME = "MISSING_RUNTIME"
    INIT_FAILED = "INIT_FAILED"


@dataclass(frozen=True)
class BrowserRuntimeInfo:
    status: BrowserRuntimeStatus
    detail: str
    engine: str = "qtwebengine"


# A surface needs an isolated profile (service worker scope) and a page to render into.
WEBENGINE_MODULES = ("PySide6.QtWebEngineCore", "PySide6.QtWebEngineWidgets")
WEBENGINE_CLASSES = ("QWebEngineProfile", "QWebEnginePage")


def _find_webengine():
    problems = []
    for module_name in WEBENGINE_MODULES:
        try:
            module = importlib.import_module(module_name)
        except Exception as exc:
            problems.append(f"{module_name}: {exc}")
            continue
        missing = [name for name in WEBENGINE_CLASSES if not hasattr(module, name)]
        if not missing:
            return module
        problems.append(f"{module_name} has no {', '.join(missing)}")
    raise ImportError("; ".join(problems))


def detect_browser_runtime() -> BrowserRuntimeInfo:
    """Report whether Qt WebEngine can host proxied surfaces in this process."""
    try:
        webengine = _find_webengine()
        supports_profiles = callable(getattr(webengine.QWebEngineProfile, "defaultProfile", None))
    except Exception as exc:
        return BrowserRuntimeInfo(
            status=BrowserRuntimeStatus.INIT_FAILED,
            detail=f"Qt WebEngine unavailable: {exc}",
        )

    if not supports_profiles:
        return BrowserRuntimeInfo(
            status=BrowserRuntimeStatus.MISSING_RUNTIME,
            detail="Qt WebEngine has no browser profile support; install the PySide6 QtWebEngine addons.",
        )
    return BrowserRuntimeInfo(status=BrowserRuntimeStatus.READY, detail="Qt WebEngine runtime detected.")


__all__ = ["BrowserRuntimeInfo", "BrowserRuntimeStatus", "detect_browser_runtime"]
