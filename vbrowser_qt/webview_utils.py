from vbrowser.constants import NEW_TAB_TITLE
from vbrowser_qt.constants import JS_NOISE_PATTERNS, LOCAL_JS_SOURCE_PREFIXES, TAB_TITLE_MAX_CHARS


def is_js_noise_message(message):
    lowered = (message or "").lower()
    if not lowered:
        return False
    return any(pattern in lowered for pattern in JS_NOISE_PATTERNS)


def is_local_console_source(source_id):
    lowered = (source_id or "").lower()
    if not lowered:
        return False
    return lowered.startswith(LOCAL_JS_SOURCE_PREFIXES)


def tab_label(title, loading=False, max_chars=TAB_TITLE_MAX_CHARS):
    text = " ".join((title or "").split()) or NEW_TAB_TITLE
    if len(text) > max_chars:
        text = text[: max_chars - 1].rstrip() + "…"
    if loading:
        return f"⟳ {text}"
    return text


__all__ = [
    "is_js_noise_message",
    "is_local_console_source",
    "tab_label",
]
