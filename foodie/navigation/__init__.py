"""Server-side stack navigator.

Keeps a history stack per UI session, renders the current screen, emits
lifecycle events and mirrors itself into the browser's history.
"""

from foodie.navigation.browser import BrowserIntegration, MemoryHistory
from foodie.navigation.controller import (
    AsyncioScheduler,
    NavigationController,
    NavState,
)
from foodie.navigation.deep_links import (
    DEEP_LINKS,
    DeepLinkTable,
    get_deep_link,
    parse_deep_link,
)
from foodie.navigation.errors import (
    AtRootError,
    DeepLinkError,
    ListenerError,
    NavigationBlockedError,
    NavigationError,
    UnknownRouteError,
)
from foodie.navigation.events import Action, Channel, EventEmitter, NavigationEvent
from foodie.navigation.history import HistoryStack, NavigationEntry
from foodie.navigation.input import GestureRecognizer, KeyboardShortcuts
from foodie.navigation.registry import ScreenDescriptor, ScreenRegistry
from foodie.navigation.renderer import Renderer, View, Viewport
from foodie.navigation.routes import Animation, Route


__all__ = [
    "DEEP_LINKS",
    "Action",
    "Animation",
    "AsyncioScheduler",
    "AtRootError",
    "BrowserIntegration",
    "Channel",
    "DeepLinkError",
    "DeepLinkTable",
    "EventEmitter",
    "GestureRecognizer",
    "HistoryStack",
    "KeyboardShortcuts",
    "ListenerError",
    "MemoryHistory",
    "NavState",
    "NavigationBlockedError",
    "NavigationController",
    "NavigationEntry",
    "NavigationError",
    "NavigationEvent",
    "Renderer",
    "Route",
    "ScreenDescriptor",
    "ScreenRegistry",
    "UnknownRouteError",
    "View",
    "Viewport",
    "get_deep_link",
    "parse_deep_link",
]
