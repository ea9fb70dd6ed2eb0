import threading

from vbrowser.browser.errors import ObservationReadError
from vbrowser.browser.runtime import BrowserRuntimeInfo, BrowserRuntimeStatus
from vbrowser.browser.services import ProxyServices
from vbrowser.browser.surface import ManualTimer


PROXY_ROOT = "https://proxy.test/calc/"
WORKER_SOURCE = b"self.addEventListener('fetch', () => {})"


class FakeSurface:
    def __init__(self, url="about:blank", title="", favicon="", ready_state="complete"):
        self.is_destroyed = False
        self.url = url
        self.title = title
        self.favicon = favicon
        self.state = ready_state
        self.visible = True
        self.fail_reads = False
        self.loaded = []
        self.history = []
        self.started_callbacks = []
        self.finished_callbacks = []
        self.unload_watch = None
        self.show_calls = 0
        self.hide_calls = 0

    def _check_readable(self):
        if self.fail_reads:
            raise ObservationReadError("cross-origin document")

    def load(self, url):
        self.loaded.append(url)

    def current_url(self):
        self._check_readable()
        return self.url

    def document_title(self):
        self._check_readable()
        return self.title

    def favicon_url(self):
        self._check_readable()
        return self.favicon

    def ready_state(self):
        self._check_readable()
        return self.state

    def connect_load_signals(self, on_started, on_finished):
        self.started_callbacks.append(on_started)
        self.finished_callbacks.append(on_finished)

    def disconnect_load_signals(self, on_started, on_finished):
        self.started_callbacks.remove(on_started)
        self.finished_callbacks.remove(on_finished)

    def attach_unload_watch(self, on_unload):
        self._check_readable()
        self.unload_watch = on_unload

    def back(self):
        self.history.append("back")

    def forward(self):
        self.history.append("forward")

    def reload(self):
        self.history.append("reload")

    def show(self):
        self.show_calls += 1
        self.visible = True

    def hide(self):
        self.hide_calls += 1
        self.visible = False

    def is_visible(self):
        return self.visible

    def destroy(self):
        self.is_destroyed = True

    def fire_load_started(self):
        for callback in list(self.started_callbacks):
            callback()

    def fire_load_finished(self):
        for callback in list(self.finished_callbacks):
            callback(True)


class TimerRecorder:
    def __init__(self):
        self.timers = []

    def __call__(self, interval_ms, callback):
        timer = ManualTimer(interval_ms, callback)
        self.timers.append(timer)
        return timer

    def fire_all(self):
        for timer in list(self.timers):
            timer.fire()


class FakeRewriter:
    def encode(self, url):
        return PROXY_ROOT + url

    def decode(self, encoded):
        if encoded.startswith(PROXY_ROOT):
            return encoded[len(PROXY_ROOT):]
        return encoded


class FakeTransport:
    def __init__(self, worker_url, fail=False):
        self.worker_url = worker_url
        self.fail = fail
        self.calls = []

    def set_transport(self, transport_url, options):
        if self.fail:
            raise ConnectionError("handshake refused")
        self.calls.append((transport_url, options))


class FakeWorker:
    def __init__(self, fail=False):
        self.fail = fail
        self.registrations = []
        self.ready_waits = 0

    def register(self, script_url, scope, type):
        if self.fail:
            raise RuntimeError("registration rejected")
        self.registrations.append((script_url, scope, type))

    def wait_ready(self):
        self.ready_waits += 1


def make_services(transport_fails=False, worker_fails=False):
    transports = []
    fetch_threads = []

    def fetch_worker(_url):
        fetch_threads.append(threading.current_thread().name)
        return WORKER_SOURCE

    def transport_factory(worker_url):
        transport = FakeTransport(worker_url, fail=transport_fails)
        transports.append(transport)
        return transport

    services = ProxyServices(
        rewriter=FakeRewriter(),
        transport_factory=transport_factory,
        worker=FakeWorker(fail=worker_fails),
        base_url="https://proxy.test/",
        fetch_worker=fetch_worker,
    )
    services.transports = transports
    services.fetch_threads = fetch_threads
    return services


def ready_runtime():
    return BrowserRuntimeInfo(status=BrowserRuntimeStatus.READY, detail="ok")


def missing_runtime():
    return BrowserRuntimeInfo(
        status=BrowserRuntimeStatus.MISSING_RUNTIME,
        detail="service workers unavailable",
    )


class Recorder:
    def __init__(self):
        self.events = []

    def listen(self, emitter, kinds):
        for kind in kinds:
            emitter.on(kind, lambda payload, kind=kind: self.events.append((kind, payload)))

    def kinds(self):
        return [kind for kind, _ in self.events]

    def payloads(self, kind):
        return [payload for seen, payload in self.events if seen == kind]

    def clear(self):
        self.events.clear()


class QueuedBackground:
    """Holds submitted setup jobs until the test runs them on a named thread."""

    def __init__(self):
        self.jobs = []

    def __call__(self, fn, on_result, on_error):
        self.jobs.append((fn, on_result, on_error))

    def run_threaded(self, thread_name="setup-worker"):
        jobs, self.jobs = self.jobs, []
        for fn, on_result, on_error in jobs:
            outcome = {}

            def _work(fn=fn, outcome=outcome):
                try:
                    outcome["result"] = fn()
                except Exception as exc:
                    outcome["error"] = f"{type(exc).__name__}: {exc}"

            worker = threading.Thread(target=_work, name=thread_name)
            worker.start()
            worker.join()
            if "error" in outcome:
                on_error(outcome["error"])
            else:
                on_result(outcome["result"])
