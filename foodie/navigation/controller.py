"""The stack navigator.

One ``NavigationController`` exists per UI session. It owns the history
stack and is the only thing that mutates it; screens, input handlers and the
browser bridge all receive it explicitly.

Every navigation call moves the controller from ``IDLE`` to ``ANIMATING``.
It returns to ``IDLE`` once the fixed animation duration has elapsed on the
scheduler's clock, and anything that tries to navigate in between is dropped,
including listeners of the call still in progress. With a zero duration the
flag is held only for the length of the call.
No navigation error escapes: failures are logged, kept in ``last_error`` and
the call returns ``None`` with the stack untouched.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable, Iterator, Mapping
from enum import Enum
from typing import Any, Protocol

from foodie.navigation.browser import BrowserIntegration
from foodie.navigation.errors import (
    AtRootError,
    NavigationBlockedError,
    NavigationError,
    UnknownRouteError,
)
from foodie.navigation.events import Action, Channel, EventEmitter, NavigationEvent
from foodie.navigation.history import HistoryStack, NavigationEntry
from foodie.navigation.registry import ScreenRegistry
from foodie.navigation.renderer import Renderer, View
from foodie.navigation.routes import Animation, Route
from foodie.navigation.targets import NavigationTarget, is_target


logger = logging.getLogger(__name__)


ANIMATION_DURATION = 0.3


class NavState(Enum):
    IDLE = "idle"
    ANIMATING = "animating"


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = asyncio.get_running_loop() if self.loop is None else self.loop
        return loop.call_later(delay, callback)


class NavigationController:
    def __init__(
        self,
        registry: ScreenRegistry,
        *,
        initial: NavigationTarget | Route | str = Route.WELCOME,
        initial_params: Mapping[str, Any] | None = None,
        services: Any = None,
        renderer: Renderer | None = None,
        events: EventEmitter | None = None,
        browser: BrowserIntegration | None = None,
        scheduler: Scheduler | None = None,
        animation_duration: float = ANIMATION_DURATION,
    ) -> None:
        self.registry = registry
        self.renderer = (
            Renderer(registry, services=services) if renderer is None else renderer
        )
        self.events = EventEmitter() if events is None else events
        self.browser = browser
        self.scheduler = AsyncioScheduler() if scheduler is None else scheduler
        self.animation_duration = animation_duration
        self.state = NavState.IDLE
        self.last_error: NavigationError | None = None
        self._timer: TimerHandle | None = None

        route, params = self._resolve(initial, initial_params)
        self.registry.lookup(route)
        self.stack = HistoryStack(NavigationEntry.create(route, params))
        self.renderer.render(self.stack.current(), Animation.NONE)
        if self.browser is not None:
            self.browser.attach(self)
            self.browser.replace(self.current(), self._title(route))

    # Queries

    @property
    def is_animating(self) -> bool:
        return self.state is NavState.ANIMATING

    @property
    def view(self) -> View | None:
        return self.renderer.view

    def current(self) -> NavigationEntry:
        return self.stack.current()

    def can_go_back(self) -> bool:
        return self.stack.can_go_back()

    def get_state(self) -> dict[str, Any]:
        return self.stack.snapshot()

    # Commands

    def navigate(
        self,
        target: NavigationTarget | Route | str,
        params: Mapping[str, Any] | None = None,
        *,
        animation: Animation | None = None,
    ) -> NavigationEntry | None:
        try:
            route, params = self._resolve(target, params)
            descriptor = self.registry.lookup(route)
            self._guard()
        except NavigationError as e:
            return self._fail(e)

        with self._in_flight():
            logger.info("Navigating to: %s", route)
            logger.debug("Params for %s: %r", route, params)
            previous = self.current()
            entry = NavigationEntry.create(route, params)
            self._emit(Channel.BEFORE_REMOVE, Action.NAVIGATE, previous)
            self.stack.push(entry)
            self._transition(
                previous,
                entry,
                Action.NAVIGATE,
                descriptor.animation if animation is None else animation,
            )
            if self.browser is not None:
                self.browser.push(entry, descriptor.title)
            self._emit_state(Action.NAVIGATE)
        return entry

    def go_back(self) -> NavigationEntry | None:
        try:
            self._guard()
            if not self.can_go_back():
                raise AtRootError()
        except NavigationError as e:
            return self._fail(e)

        with self._in_flight():
            previous = self.current()
            entry = self.stack.back()
            logger.info("Going back to: %s", entry.route)
            self._transition(previous, entry, Action.GO_BACK, Animation.SLIDE_FROM_LEFT)
            if self.browser is not None:
                self.browser.push(entry, self._title(entry.route))
            self._emit_state(Action.GO_BACK)
        return entry

    def replace(
        self,
        target: NavigationTarget | Route | str,
        params: Mapping[str, Any] | None = None,
    ) -> NavigationEntry | None:
        try:
            route, params = self._resolve(target, params)
            descriptor = self.registry.lookup(route)
            self._guard()
        except NavigationError as e:
            return self._fail(e)

        with self._in_flight():
            logger.info("Replacing current screen with: %s", route)
            previous = self.current()
            entry = NavigationEntry.create(route, params)
            self._emit(Channel.BEFORE_REMOVE, Action.REPLACE, previous)
            self.stack.replace(entry)
            self._transition(previous, entry, Action.REPLACE, Animation.FADE)
            if self.browser is not None:
                self.browser.replace(entry, descriptor.title)
            self._emit_state(Action.REPLACE)
        return entry

    def reset(
        self,
        target: NavigationTarget | Route | str = Route.WELCOME,
        params: Mapping[str, Any] | None = None,
    ) -> NavigationEntry | None:
        try:
            route, params = self._resolve(target, params)
            descriptor = self.registry.lookup(route)
            self._guard()
        except NavigationError as e:
            return self._fail(e)

        with self._in_flight():
            logger.info("Resetting navigation to: %s", route)
            previous = self.current()
            entry = NavigationEntry.create(route, params)
            self._emit(Channel.BEFORE_REMOVE, Action.RESET, previous)
            self.stack.reset(entry)
            self._transition(previous, entry, Action.RESET, Animation.FADE)
            if self.browser is not None:
                self.browser.replace(entry, descriptor.title)
            self._emit_state(Action.RESET)
        return entry

    def restore(
        self,
        target: NavigationTarget | Route | str,
        params: Mapping[str, Any] | None = None,
    ) -> NavigationEntry | None:
        """Navigate without touching browser history, for back/forward buttons.

        Moves the pointer onto a matching entry when the stack still holds one,
        otherwise pushes like ``navigate``. When blocked, the browser has
        already moved, so its current record is rewritten to match the stack.
        """
        try:
            route, params = self._resolve(target, params)
            self.registry.lookup(route)
            self._guard()
        except NavigationBlockedError as e:
            if self.browser is not None:
                current = self.current()
                self.browser.replace(current, self._title(current.route))
            return self._fail(e)
        except NavigationError as e:
            return self._fail(e)

        with self._in_flight():
            previous = self.current()
            index = self.stack.find(route, params)
            if index is None:
                self._emit(Channel.BEFORE_REMOVE, Action.POP, previous)
                entry = self.stack.push(NavigationEntry.create(route, params))
            else:
                entry = self.stack.seek(index)
            logger.info("Restoring %s from browser history", route)
            self._transition(previous, entry, Action.POP, Animation.FADE)
            self._emit_state(Action.POP)
        return entry

    def refresh(self) -> View:
        """Re-render the current screen in place, e.g. after its data changed."""
        return self.renderer.render(self.current(), Animation.NONE)

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self.state = NavState.IDLE

    # Internals

    def _resolve(
        self,
        target: NavigationTarget | Route | str,
        params: Mapping[str, Any] | None,
    ) -> tuple[Route, dict[str, Any]]:
        if is_target(target):
            if params:
                raise ValueError("Typed targets carry their own params.")
            return target.route, target.params()  # pyright: ignore[reportAttributeAccessIssue]
        return Route.parse(target), dict(params or {})  # pyright: ignore[reportArgumentType]

    def _guard(self) -> None:
        if self.is_animating:
            raise NavigationBlockedError()

    @contextlib.contextmanager
    def _in_flight(self) -> Iterator[None]:
        # Claimed before any event fires, so listeners cannot re-enter.
        self.state = NavState.ANIMATING
        try:
            yield
        finally:
            if self._timer is None:
                self.state = NavState.IDLE

    def _fail(self, error: NavigationError) -> None:
        self.last_error = error
        match error:
            case NavigationBlockedError():
                logger.debug(str(error))
            case UnknownRouteError():
                logger.warning(str(error))
            case AtRootError():
                logger.info(str(error))
            case _:
                logger.error(str(error))
        return None

    def _title(self, route: Route) -> str:
        return self.registry.lookup(route).title

    def _transition(
        self,
        previous: NavigationEntry,
        entry: NavigationEntry,
        action: Action,
        animation: Animation,
    ) -> None:
        self._emit(Channel.BLUR, action, previous)
        self._start_animation()
        self.renderer.render(entry, animation)
        self._emit(Channel.FOCUS, action, entry)

    def _start_animation(self) -> None:
        if self.animation_duration <= 0:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self.scheduler.call_later(
            self.animation_duration, self._finish_animation
        )

    def _finish_animation(self) -> None:
        self._timer = None
        self.state = NavState.IDLE

    def _emit(self, channel: Channel, action: Action, entry: NavigationEntry) -> None:
        event = NavigationEvent(
            channel=channel, action=action, route=entry.route, entry=entry
        )
        self._record(self.events.emit(event))

    def _emit_state(self, action: Action) -> None:
        event = NavigationEvent(
            channel=Channel.STATE_CHANGE,
            action=action,
            route=self.current().route,
            entry=self.current(),
            state=self.get_state(),
        )
        self._record(self.events.emit(event))

    def _record(self, failures: list[Any]) -> None:
        if failures:
            self.last_error = failures[-1]
