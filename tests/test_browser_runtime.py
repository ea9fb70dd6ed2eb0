import types

from vbrowser.browser import runtime
from vbrowser.browser.runtime import BrowserRuntimeStatus, detect_browser_runtime


def _webengine_module(profile):
    return types.SimpleNamespace(QWebEngineProfile=profile, QWebEnginePage=object)


def test_detect_browser_runtime_ready(monkeypatch):
    profile = types.SimpleNamespace(defaultProfile=lambda: object())
    monkeypatch.setattr(runtime.importlib, "import_module", lambda name: _webengine_module(profile))

    info = detect_browser_runtime()
    assert info.status == BrowserRuntimeStatus.READY
    assert info.engine == "qtwebengine"


def test_detect_browser_runtime_missing(monkeypatch):
    profile = types.SimpleNamespace()
    monkeypatch.setattr(runtime.importlib, "import_module", lambda name: _webengine_module(profile))

    info = detect_browser_runtime()
    assert info.status == BrowserRuntimeStatus.MISSING_RUNTIME


def test_detect_browser_runtime_init_failed(monkeypatch):
    def fake_import(name):
        raise ImportError(f"No module named {name}")

    monkeypatch.setattr(runtime.importlib, "import_module", fake_import)

    info = detect_browser_runtime()
    assert info.status == BrowserRuntimeStatus.INIT_FAILED
    assert "PySide6.QtWebEngineCore" in info.detail


def test_detect_browser_runtime_uses_widgets_module_fallback(monkeypatch):
    profile = types.SimpleNamespace(defaultProfile=lambda: object())

    def fake_import(name):
        if name == "PySide6.QtWebEngineCore":
            return types.SimpleNamespace()
        if name == "PySide6.QtWebEngineWidgets":
            return _webengine_module(profile)
        raise ImportError(name)

    monkeypatch.setattr(runtime.importlib, "import_module", fake_import)
    info = detect_browser_runtime()
    assert info.status == BrowserRuntimeStatus.READY
