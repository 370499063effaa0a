import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from foodie.navigation.errors import ListenerError
from foodie.navigation.history import NavigationEntry
from foodie.navigation.routes import Route


logger = logging.getLogger(__name__)


class Channel(Enum):
    FOCUS = "focus"
    BLUR = "blur"
    STATE_CHANGE = "stateChange"
    BEFORE_REMOVE = "beforeRemove"


class Action(Enum):
    NAVIGATE = "NAVIGATE"
    GO_BACK = "GO_BACK"
    REPLACE = "REPLACE"
    RESET = "RESET"
    POP = "POP"


@dataclass(frozen=True, slots=True)
class NavigationEvent:
    channel: Channel
    action: Action
    route: Route | None = None
    entry: NavigationEntry | None = None
    state: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[NavigationEvent], None]
Unsubscribe = Callable[[], None]


class EventEmitter:
    """Synchronous pub/sub over the four navigation lifecycle channels."""

    def __init__(self) -> None:
        self._listeners: dict[Channel, list[Listener]] = {c: [] for c in Channel}

    def subscribe(self, channel: Channel | str, handler: Listener) -> Unsubscribe:
        channel = Channel(channel)
        self._listeners[channel].append(handler)

        def unsubscribe() -> None:
            try:
                self._listeners[channel].remove(handler)
            except ValueError:
                pass

        return unsubscribe

    def on_focus(self, handler: Listener) -> Unsubscribe:
        return self.subscribe(Channel.FOCUS, handler)

    def on_blur(self, handler: Listener) -> Unsubscribe:
        return self.subscribe(Channel.BLUR, handler)

    def on_state_change(self, handler: Listener) -> Unsubscribe:
        return self.subscribe(Channel.STATE_CHANGE, handler)

    def on_before_remove(self, handler: Listener) -> Unsubscribe:
        return self.subscribe(Channel.BEFORE_REMOVE, handler)

    def listener_count(self, channel: Channel | str) -> int:
        return len(self._listeners[Channel(channel)])

    def emit(self, event: NavigationEvent) -> list[ListenerError]:
        failures: list[ListenerError] = []
        # Snapshot, handlers may unsubscribe themselves.
        for handler in list(self._listeners[event.channel]):
            try:
                handler(event)
            except Exception as e:
                error = ListenerError(event.channel.value, handler, e)
                logger.error(str(error), exc_info=e)
                failures.append(error)
        return failures
