import json
import os

from vbrowser.constants import DEFAULT_SEARCH_ENGINE, PROXY_MODE_DIRECT, PROXY_ORIGIN, SEARCH_ENGINES
from vbrowser.errors import ValidationError
from vbrowser.paths import CONFIG_DIR, CONFIG_FILE


class Config:
    """JSON-backed settings with defaults; a broken file never blocks startup."""

    DEFAULTS = {
        "search_engine": DEFAULT_SEARCH_ENGINE,
        "proxy_mode": PROXY_MODE_DIRECT,
        "proxy_origin": PROXY_ORIGIN,
        "home_url": "",
        "qt_window_geometry": "1200x800",
    }

    def __init__(self):
        self.data = dict(self.DEFAULTS)
        self.load_error = None
        self.load()

    def load(self):
        self.load_error = None
        if not os.path.isfile(CONFIG_FILE):
            return
        try:
            with open(CONFIG_FILE, encoding="utf-8") as handle:
                saved = json.load(handle)
        except (OSError, ValueError) as exc:
            self.load_error = str(exc)
            return
        if not isinstance(saved, dict):
            self.load_error = "Config payload must be a JSON object."
            return
        self.data.update(saved)

    def save(self):
        os.makedirs(CONFIG_DIR, exist_ok=True)
        staging_file = CONFIG_FILE + ".tmp"
        with open(staging_file, "w", encoding="utf-8") as handle:
            json.dump(self.data, handle, indent=2, sort_keys=True)
        os.replace(staging_file, CONFIG_FILE)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        if key in self.data and self.data[key] == value:
            return
        self.data[key] = value
        self.save()


class SearchEnginePreference:
    """Get/set port for the persisted search engine choice."""

    KEY = "search_engine"

    def __init__(self, config: Config) -> None:
        self.config = config

    def get(self) -> str:
        engine_id = str(self.config.get(self.KEY) or "")
        if engine_id not in SEARCH_ENGINES:
            return DEFAULT_SEARCH_ENGINE
        return engine_id

    def set(self, engine_id: str) -> None:
        if engine_id not in SEARCH_ENGINES:
            raise ValidationError(f"Unknown search engine: {engine_id}")
        self.config.set(self.KEY, engine_id)
