class NavigationError(Exception):
    """Base for everything the navigation core reports."""


class UnknownRouteError(NavigationError):
    def __init__(self, route: object) -> None:
        super().__init__(f"Screen {route!r} not found in navigation registry")
        self.route = route


class NavigationBlockedError(NavigationError):
    def __init__(self, detail: str = "animation in progress") -> None:
        super().__init__(f"Navigation blocked - {detail}")


class AtRootError(NavigationError):
    def __init__(self) -> None:
        super().__init__("Cannot go back - at root screen")


class ListenerError(NavigationError):
    """A subscriber raised while handling a navigation event."""

    def __init__(self, channel: str, handler: object, cause: BaseException) -> None:
        super().__init__(f"Error in {channel} listener {handler!r}: {cause!r}")
        self.channel = channel
        self.handler = handler
        self.cause = cause


class RegistryFrozenError(NavigationError):
    def __init__(self) -> None:
        super().__init__("Screen registry is read-only after initialization")


class DeepLinkError(ValueError):
    pass
