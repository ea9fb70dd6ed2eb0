import pytest
import requests

from vbrowser.browser import services
from vbrowser.browser.services import (
    DirectTransport,
    NoopWorkerRegistrar,
    PassthroughRewriteEngine,
    XorRewriteEngine,
    bootstrap_worker_url,
    build_services,
    xor_decode,
    xor_encode,
)
from vbrowser.errors import ValidationError


def test_xor_codec_matches_known_value():
    assert xor_encode("https://example.com") == "hvtrs8%2F-ezaopne%2Ccmm"
    assert xor_decode("hvtrs8%2F-ezaopne%2Ccmm") == "https://example.com"


def test_xor_decode_keeps_query_suffix():
    assert xor_decode(xor_encode("https://a.b/") + "?x=1") == "https://a.b/?x=1"


def test_xor_codec_handles_empty_input():
    assert xor_encode("") == ""
    assert xor_decode("") == ""


def test_xor_rewrite_engine_prefixes_origin():
    engine = XorRewriteEngine(origin="http://localhost:8080/", prefix="/calc/")

    encoded = engine.encode("https://example.com")

    assert encoded == "http://localhost:8080/calc/hvtrs8%2F-ezaopne%2Ccmm"
    assert engine.decode(encoded) == "https://example.com"
    assert engine.decode("https://elsewhere.test/") == "https://elsewhere.test/"


def test_passthrough_rewrite_engine_is_identity():
    engine = PassthroughRewriteEngine()
    assert engine.encode("https://a.b") == "https://a.b"
    assert engine.decode("https://a.b") == "https://a.b"


def test_bootstrap_worker_fetches_raw_script():
    fetched = []

    def fetch(url):
        fetched.append(url)
        return b"worker"

    result = bootstrap_worker_url("https://proxy.test/matrix/worker.js", fetch=fetch)

    assert fetched == ["https://proxy.test/matrix/worker.js?raw=true"]
    assert result.script_url == "data:text/javascript;base64,d29ya2Vy"
    assert result.fallback is False


def test_bootstrap_worker_without_fetcher_uses_direct_url():
    result = bootstrap_worker_url("https://proxy.test/matrix/worker.js", fetch=None)

    assert result.script_url == "https://proxy.test/matrix/worker.js"
    assert result.fallback is False


def test_bootstrap_worker_falls_back_to_cache_busted_url(caplog):
    def fetch(_url):
        raise requests.ConnectionError("offline")

    result = bootstrap_worker_url("https://proxy.test/matrix/worker.js?build=2", fetch=fetch)

    assert result.fallback is True
    assert result.script_url.startswith("https://proxy.test/matrix/worker.js?build=2&v=")
    assert "Failed to fetch worker raw content" in caplog.text


def test_fetch_worker_source_raises_for_http_errors(monkeypatch):
    class _Response:
        content = b""

        def raise_for_status(self):
            raise requests.HTTPError("404 Not Found")

    monkeypatch.setattr(services.requests, "get", lambda url, timeout: _Response())

    with pytest.raises(requests.HTTPError):
        services.fetch_worker_source("https://proxy.test/matrix/worker.js?raw=true")


def test_build_services_direct_mode():
    built = build_services({"proxy_mode": "direct", "proxy_origin": "http://localhost:9000"})

    assert isinstance(built.rewriter, PassthroughRewriteEngine)
    assert isinstance(built.worker, NoopWorkerRegistrar)
    assert built.worker_url() == "http://localhost:9000/matrix/worker.js"
    assert built.transport_url() == "http://localhost:9000/vector/index.mjs"
    assert built.bootstrap_worker().script_url == "http://localhost:9000/matrix/worker.js"
    transport = built.transport_factory("worker.js")
    assert isinstance(transport, DirectTransport)


def test_build_services_xor_mode():
    built = build_services({"proxy_mode": "XOR", "proxy_origin": "http://localhost:9000"})

    assert isinstance(built.rewriter, XorRewriteEngine)
    assert built.rewriter.encode("https://a.b").startswith("http://localhost:9000/calc/")


def test_build_services_rejects_unknown_mode():
    with pytest.raises(ValidationError):
        build_services({"proxy_mode": "socks"})


def test_load_dependencies_runs_each_loader_once():
    calls = []
    built = build_services({"proxy_mode": "direct"})
    built.dependencies = (lambda: calls.append("bundle"), lambda: calls.append("config"))

    built.load_dependencies()

    assert calls == ["bundle", "config"]
