import vbrowser
from vbrowser.browser import SessionManager, SurfaceEvent, resolve_destination
from vbrowser.constants import SEARCH_ENGINES
from vbrowser.infra.config_store import Config
from vbrowser.paths import CONFIG_FILE


def test_package_exports_work():
    assert vbrowser.browser.SessionManager is SessionManager
    assert SurfaceEvent.URL_CHANGE.value == "urlChange"
    assert resolve_destination("about:blank") == "about:blank"
    assert CONFIG_FILE.endswith("config.json")


def test_search_engine_templates_have_one_placeholder():
    for template in SEARCH_ENGINES.values():
        assert template.count("%s") == 1


def test_config_defaults_cover_browser_settings():
    config = Config()
    assert config.get("search_engine") in SEARCH_ENGINES
    assert config.get("proxy_mode") in ("direct", "xor")
    assert config.get("qt_window_geometry")
