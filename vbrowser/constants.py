APP_NAME = "Virtual Browser"
BLANK_URL = "about:blank"
NEW_TAB_TITLE = "New Tab"
SURFACE_ID_PREFIX = "surface-"

DEFAULT_ENGINE = "vector"
DEFAULT_SEARCH_ENGINE = "duckduckgo"
SEARCH_ENGINES = {
    "duckduckgo": "https://duckduckgo.com/?q=%s",
    "google": "https://www.google.com/search?q=%s",
    "bing": "https://www.bing.com/search?q=%s",
    "brave": "https://search.brave.com/search?q=%s",
}

OBSERVATION_POLL_INTERVAL_MS = 500
DOCUMENT_READY_COMPLETE = "complete"

PROXY_MODE_DIRECT = "direct"
PROXY_MODE_XOR = "xor"
PROXY_PREFIX = "/calc/"
PROXY_ORIGIN = "http://localhost:8080"
WISP_URL = "/ws/"
TRANSPORT_PATH = "vector/index.mjs"
WORKER_PATH = "matrix/worker.js"
WORKER_SCRIPT_PATH = "compute.js"
WORKER_SCOPE = "./"
WORKER_TYPE = "module"

HTTP_CONNECT_TIMEOUT_SEC = 10
HTTP_READ_TIMEOUT_SEC = 45
