JS_CONSOLE_DEBUG_ENV = "VBROWSER_DEBUG_JS_CONSOLE"

JS_NOISE_PATTERNS = (
    "was preloaded using link preload but not used",
    "permissions policy violation: unload is not allowed",
    "error with permissions-policy header: unrecognized feature",
    "document-policy http header: unrecognized document policy feature name",
    "unable to find performance entry for rtb request",
)

LOCAL_JS_SOURCE_PREFIXES = (
    "about:",
    "data:",
    "file:",
    "qrc:",
)

ROOT_LAYOUT_MARGINS = (0, 0, 0, 0)
ROOT_LAYOUT_SPACING = 0
NAV_BAR_MARGINS = (8, 6, 8, 6)
NAV_BAR_SPACING = 6

TOAST_LAYOUT_MARGINS = (10, 6, 10, 6)
TOAST_LAYOUT_SPACING = 6
TOAST_MARGIN_PX = 16
TOAST_TOP_OFFSET_PX = 8
TOAST_DEFAULT_DURATION_MS = 2200
TOAST_ERROR_DURATION_MS = 6000

QT_WINDOW_DEFAULT_GEOMETRY = "1200x800"
QT_WINDOW_MIN_WIDTH = 640
QT_WINDOW_MIN_HEIGHT = 480
TAB_TITLE_MAX_CHARS = 28

__all__ = [
    "JS_CONSOLE_DEBUG_ENV",
    "JS_NOISE_PATTERNS",
    "LOCAL_JS_SOURCE_PREFIXES",
    "NAV_BAR_MARGINS",
    "NAV_BAR_SPACING",
    "QT_WINDOW_DEFAULT_GEOMETRY",
    "QT_WINDOW_MIN_HEIGHT",
    "QT_WINDOW_MIN_WIDTH",
    "ROOT_LAYOUT_MARGINS",
    "ROOT_LAYOUT_SPACING",
    "TAB_TITLE_MAX_CHARS",
    "TOAST_DEFAULT_DURATION_MS",
    "TOAST_ERROR_DURATION_MS",
    "TOAST_LAYOUT_MARGINS",
    "TOAST_LAYOUT_SPACING",
    "TOAST_MARGIN_PX",
    "TOAST_TOP_OFFSET_PX",
]
