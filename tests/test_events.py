import logging

import pytest

from foodie.navigation.events import Action, Channel, EventEmitter, NavigationEvent
from foodie.navigation.routes import Route


def event(channel: Channel) -> NavigationEvent:
    return NavigationEvent(channel=channel, action=Action.NAVIGATE, route=Route.HOME)


def test_handlers_run_in_registration_order() -> None:
    emitter = EventEmitter()
    calls: list[str] = []
    emitter.subscribe(Channel.FOCUS, lambda e: calls.append("first"))
    emitter.subscribe("focus", lambda e: calls.append("second"))
    emitter.on_focus(lambda e: calls.append("third"))
    emitter.emit(event(Channel.FOCUS))
    assert calls == ["first", "second", "third"]


def test_only_the_emitted_channel_runs() -> None:
    emitter = EventEmitter()
    calls: list[Channel] = []
    emitter.on_blur(lambda e: calls.append(e.channel))
    emitter.on_focus(lambda e: calls.append(e.channel))
    emitter.emit(event(Channel.BLUR))
    assert calls == [Channel.BLUR]


def test_unsubscribe() -> None:
    emitter = EventEmitter()
    calls: list[str] = []
    unsubscribe = emitter.on_state_change(lambda e: calls.append("x"))
    unsubscribe()
    unsubscribe()
    emitter.emit(event(Channel.STATE_CHANGE))
    assert calls == []
    assert emitter.listener_count(Channel.STATE_CHANGE) == 0


def test_failing_handler_does_not_stop_the_rest(caplog: pytest.LogCaptureFixture) -> None:
    emitter = EventEmitter()
    calls: list[str] = []

    def boom(e: NavigationEvent) -> None:
        raise RuntimeError("boom")

    emitter.on_before_remove(boom)
    emitter.on_before_remove(lambda e: calls.append("after"))
    with caplog.at_level(logging.ERROR):
        failures = emitter.emit(event(Channel.BEFORE_REMOVE))

    assert calls == ["after"]
    assert len(failures) == 1
    assert isinstance(failures[0].cause, RuntimeError)
    assert "beforeRemove" in caplog.text


def test_handler_may_unsubscribe_itself() -> None:
    emitter = EventEmitter()
    calls: list[str] = []
    unsubscribe = None

    def once(e: NavigationEvent) -> None:
        calls.append("once")
        assert unsubscribe is not None
        unsubscribe()

    unsubscribe = emitter.on_focus(once)
    emitter.on_focus(lambda e: calls.append("always"))
    emitter.emit(event(Channel.FOCUS))
    emitter.emit(event(Channel.FOCUS))
    assert calls == ["once", "always", "always"]


def test_unknown_channel() -> None:
    with pytest.raises(ValueError):
        EventEmitter().subscribe("click", lambda e: None)
