import re
from urllib.parse import quote, urlsplit

from vbrowser.constants import DEFAULT_SEARCH_ENGINE, SEARCH_ENGINES
from vbrowser.errors import ValidationError


# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~".
QUERY_SAFE_CHARS = "!*'()"
HIERARCHICAL_SCHEMES = {"http", "https", "ws", "wss", "ftp", "file"}
_INVALID_HOST_CHARS = re.compile(r"[\s<>\\^`{|}%]")


def search_template_for(engine_id: str, templates=None) -> str:
    templates = SEARCH_ENGINES if templates is None else templates
    template = templates.get(engine_id)
    if not template:
        raise ValidationError(f"Unknown search engine: {engine_id}")
    return template


def parse_absolute_url(candidate: str) -> str | None:
    """Return the candidate when it is already an absolute URL, else None."""
    if not candidate or any(ch.isspace() for ch in candidate.split(":", 1)[0]):
        return None
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    scheme = (parts.scheme or "").lower()
    if not scheme:
        return None
    if scheme in HIERARCHICAL_SCHEMES and scheme != "file":
        if not parts.netloc or _INVALID_HOST_CHARS.search(parts.netloc):
            return None
    return candidate


def _parse_http_host(candidate: str) -> str | None:
    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
    except ValueError:
        return None
    if not hostname or _INVALID_HOST_CHARS.search(parts.netloc):
        return None
    return hostname


def build_search_url(query: str, template: str) -> str:
    return template.replace("%s", quote(query, safe=QUERY_SAFE_CHARS), 1)


def resolve_destination(raw_input: str, search_template: str | None = None) -> str:
    """Turn address-bar input into a navigable URL.

    Absolute URLs pass through untouched, bare domains such as ``example.com``
    get an ``http://`` prefix, and anything else becomes a search query.
    """
    trimmed = (raw_input or "").strip()
    absolute = parse_absolute_url(trimmed)
    if absolute is not None:
        return absolute

    with_protocol = "http://" + trimmed
    hostname = _parse_http_host(with_protocol)
    if hostname and "." in hostname:
        return with_protocol

    template = search_template or SEARCH_ENGINES[DEFAULT_SEARCH_ENGINE]
    return build_search_url(trimmed, template)


__all__ = [
    "build_search_url",
    "parse_absolute_url",
    "resolve_destination",
    "search_template_for",
]
