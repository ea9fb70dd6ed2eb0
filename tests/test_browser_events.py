from vbrowser.browser.events import (
    ACTIVE_ONLY_EVENTS,
    CLIENT_EVENTS,
    PASSIVE_EVENTS,
    EventEmitter,
    SurfaceEvent,
    is_passive,
    should_forward,
)


def test_passive_events_forward_regardless_of_active_session():
    for kind in PASSIVE_EVENTS:
        assert should_forward(kind, "surface-a", "surface-b") is True
        assert should_forward(kind, "surface-a", None) is True
        assert is_passive(kind) is True


def test_active_only_events_require_matching_origin():
    for kind in ACTIVE_ONLY_EVENTS:
        assert should_forward(kind, "surface-a", "surface-a") is True
        assert should_forward(kind, "surface-a", "surface-b") is False
        assert should_forward(kind, "surface-a", None) is False
        assert should_forward(kind, None, None) is False
        assert is_passive(kind) is False


def test_every_client_event_has_a_policy():
    for kind in CLIENT_EVENTS:
        assert (kind in PASSIVE_EVENTS) != (kind in ACTIVE_ONLY_EVENTS)


def test_manager_lifecycle_events_are_not_forwarded_from_clients():
    assert should_forward(SurfaceEvent.SURFACE_CREATED, "surface-a", "surface-a") is False
    assert should_forward(SurfaceEvent.SURFACE_CLOSED, "surface-a", "surface-a") is False


def test_event_names_match_wire_values():
    assert SurfaceEvent.URL_CHANGE.value == "urlChange"
    assert SurfaceEvent("loadingStop") is SurfaceEvent.LOADING_STOP


def test_emitter_delivers_in_subscription_order_and_supports_off():
    emitter = EventEmitter()
    seen = []

    def first(payload):
        seen.append(("first", payload))

    def second(payload):
        seen.append(("second", payload))

    emitter.on(SurfaceEvent.TITLE_CHANGE, first)
    emitter.on("titleChange", second)
    emitter.emit(SurfaceEvent.TITLE_CHANGE, "Example")
    emitter.off(SurfaceEvent.TITLE_CHANGE, first)
    emitter.emit(SurfaceEvent.TITLE_CHANGE, "Again")

    assert seen == [("first", "Example"), ("second", "Example"), ("second", "Again")]
    assert emitter.listener_count(SurfaceEvent.TITLE_CHANGE) == 1


def test_failing_listener_does_not_block_others(caplog):
    emitter = EventEmitter()
    seen = []

    def broken(_payload):
        raise RuntimeError("listener failed")

    emitter.on(SurfaceEvent.READY, broken)
    emitter.on(SurfaceEvent.READY, seen.append)

    emitter.emit(SurfaceEvent.READY, None)

    assert seen == [None]
    assert "Listener for ready failed" in caplog.text


def test_emit_without_listeners_is_noop():
    EventEmitter().emit(SurfaceEvent.ERROR, RuntimeError("unheard"))
