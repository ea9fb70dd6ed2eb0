"""External collaborators of a session client.

The rewrite engine, the transport configurator and the background worker
registrar are opaque services. This module defines the interfaces the client
relies on plus the small concrete implementations the desktop host ships with.
"""

import base64
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
import logging
import time
from typing import Protocol
from urllib.parse import quote, unquote, urljoin

import requests

from vbrowser.constants import (
    DEFAULT_ENGINE,
    HTTP_CONNECT_TIMEOUT_SEC,
    HTTP_READ_TIMEOUT_SEC,
    PROXY_MODE_DIRECT,
    PROXY_MODE_XOR,
    PROXY_ORIGIN,
    PROXY_PREFIX,
    TRANSPORT_PATH,
    WISP_URL,
    WORKER_PATH,
    WORKER_SCOPE,
    WORKER_SCRIPT_PATH,
    WORKER_TYPE,
)
from vbrowser.errors import ValidationError


logger = logging.getLogger(__name__)


class RewriteEngine(Protocol):
    def encode(self, url: str) -> str: ...

    def decode(self, encoded: str) -> str: ...


class TransportConfigurator(Protocol):
    def set_transport(self, transport_url: str, options: list[dict]) -> None: ...


class WorkerRegistrar(Protocol):
    def register(self, script_url: str, scope: str, type: str) -> None: ...

    def wait_ready(self) -> None: ...


def xor_encode(text: str) -> str:
    if not text:
        return text
    mixed = "".join(chr(ord(ch) ^ 2) if index % 2 else ch for index, ch in enumerate(text))
    return quote(mixed, safe="-_.!~*'()")


def xor_decode(text: str) -> str:
    if not text:
        return text
    encoded, sep, search = text.partition("?")
    plain = unquote(encoded)
    decoded = "".join(chr(ord(ch) ^ 2) if index % 2 else ch for index, ch in enumerate(plain))
    return decoded + (sep + search if sep else "")


class XorRewriteEngine:
    """Serves proxied URLs as ``origin + prefix + xor(url)``."""

    def __init__(self, origin: str = PROXY_ORIGIN, prefix: str = PROXY_PREFIX) -> None:
        self.origin = origin.rstrip("/")
        self.prefix = prefix

    def encode(self, url: str) -> str:
        return f"{self.origin}{self.prefix}{xor_encode(url)}"

    def decode(self, encoded: str) -> str:
        if self.prefix not in (encoded or ""):
            return encoded
        return xor_decode(encoded.split(self.prefix, 1)[1])


class PassthroughRewriteEngine:
    """Direct mode: URLs are loaded without rewriting."""

    def encode(self, url: str) -> str:
        return url

    def decode(self, encoded: str) -> str:
        return encoded


class DirectTransport:
    """Transport used when pages are fetched without a tunnel."""

    def __init__(self, worker_url: str) -> None:
        self.worker_url = worker_url
        self.transport_url = None
        self.options = []

    def set_transport(self, transport_url: str, options: list[dict]) -> None:
        self.transport_url = transport_url
        self.options = list(options)


class NoopWorkerRegistrar:
    def __init__(self) -> None:
        self.registrations = []

    def register(self, script_url: str, scope: str, type: str) -> None:
        self.registrations.append((script_url, scope, type))

    def wait_ready(self) -> None:
        return None


@dataclass(frozen=True)
class WorkerBootstrap:
    script_url: str
    fallback: bool = False


def worker_data_url(source: bytes) -> str:
    return "data:text/javascript;base64," + base64.b64encode(source).decode("ascii")


def fetch_worker_source(
    url: str,
    timeout=(HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC),
) -> bytes:
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content or b""


def bootstrap_worker_url(worker_url: str, fetch: Callable[[str], bytes] | None = fetch_worker_source) -> WorkerBootstrap:
    """Inline the raw worker script as a data URL.

    Falls back to a cache-busted direct URL when the fetch fails. Without a
    fetcher the worker is referenced directly.
    """
    if fetch is None:
        return WorkerBootstrap(script_url=worker_url)
    fetch_url = worker_url + ("&" if "?" in worker_url else "?") + "raw=true"
    try:
        source = fetch(fetch_url)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch worker raw content, using direct URL: %s", exc)
        return WorkerBootstrap(script_url=_cache_busted(worker_url), fallback=True)
    return WorkerBootstrap(script_url=worker_data_url(source))


def _cache_busted(url: str) -> str:
    return url + ("&" if "?" in url else "?") + f"v={int(time.time() * 1000)}"


@dataclass
class ProxyServices:
    rewriter: RewriteEngine
    transport_factory: Callable[[str], TransportConfigurator]
    worker: WorkerRegistrar
    base_url: str = PROXY_ORIGIN + "/"
    worker_path: str = WORKER_PATH
    worker_script: str = WORKER_SCRIPT_PATH
    transport_path: str = TRANSPORT_PATH
    wisp_url: str = WISP_URL
    engine: str = DEFAULT_ENGINE
    fetch_worker: Callable[[str], bytes] | None = fetch_worker_source
    dependencies: Iterable[Callable[[], None]] = field(default_factory=tuple)

    def load_dependencies(self) -> None:
        for loader in self.dependencies:
            loader()

    def worker_url(self) -> str:
        return urljoin(self.base_url, self.worker_path)

    def transport_url(self) -> str:
        return urljoin(self.base_url, self.transport_path)

    def worker_script_url(self) -> str:
        return _cache_busted(self.worker_script)

    def bootstrap_worker(self) -> WorkerBootstrap:
        return bootstrap_worker_url(self.worker_url(), fetch=self.fetch_worker)


def build_services(config) -> ProxyServices:
    mode = str(config.get("proxy_mode") or PROXY_MODE_DIRECT).lower()
    origin = str(config.get("proxy_origin") or PROXY_ORIGIN)
    if mode == PROXY_MODE_XOR:
        return ProxyServices(
            rewriter=XorRewriteEngine(origin=origin),
            transport_factory=DirectTransport,
            worker=NoopWorkerRegistrar(),
            base_url=origin.rstrip("/") + "/",
        )
    if mode == PROXY_MODE_DIRECT:
        return ProxyServices(
            rewriter=PassthroughRewriteEngine(),
            transport_factory=DirectTransport,
            worker=NoopWorkerRegistrar(),
            base_url=origin.rstrip("/") + "/",
            fetch_worker=None,
        )
    raise ValidationError(f"Unknown proxy mode: {mode}")


__all__ = [
    "DirectTransport",
    "NoopWorkerRegistrar",
    "PassthroughRewriteEngine",
    "ProxyServices",
    "RewriteEngine",
    "TransportConfigurator",
    "WorkerBootstrap",
    "WorkerRegistrar",
    "XorRewriteEngine",
    "bootstrap_worker_url",
    "build_services",
    "worker_data_url",
    "fetch_worker_source",
    "xor_decode",
    "xor_encode",
]
