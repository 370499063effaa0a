import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from foodie.navigation.controller import NavigationController


logger = logging.getLogger(__name__)


GESTURE_THRESHOLD = 50


class GestureRecognizer:
    """Turns a rightward swipe into a back navigation."""

    def __init__(
        self,
        controller: "NavigationController",
        *,
        threshold: float = GESTURE_THRESHOLD,
    ) -> None:
        self.controller = controller
        self.threshold = threshold
        self.start: tuple[float, float] = (0.0, 0.0)
        self.position: tuple[float, float] = (0.0, 0.0)
        self.tracking = False

    def touch_start(self, x: float, y: float) -> None:
        self.start = self.position = (x, y)
        self.tracking = True

    def touch_move(self, x: float, y: float) -> bool:
        """Returns True when the move completed a back gesture."""
        if not self.tracking:
            return False
        self.position = (x, y)
        dx = x - self.start[0]
        dy = y - self.start[1]
        if abs(dx) <= abs(dy) or dx <= self.threshold:
            return False
        descriptor = self.controller.registry.lookup(self.controller.current().route)
        if not (descriptor.gesture_enabled and self.controller.can_go_back()):
            return False
        # One back per gesture.
        self.tracking = False
        return self.controller.go_back() is not None

    def touch_end(self) -> None:
        self.tracking = False


@dataclass(frozen=True, slots=True)
class KeyCombo:
    key: str
    alt: bool = False
    ctrl: bool = False
    shift: bool = False


KeyAction = Callable[["NavigationController"], object]


def _go_back(controller: "NavigationController") -> object:
    return controller.go_back()


KEY_BINDINGS: dict[KeyCombo, KeyAction] = {
    KeyCombo("ArrowLeft", alt=True): _go_back,
    KeyCombo("Escape"): _go_back,
}


class KeyboardShortcuts:
    def __init__(
        self,
        controller: "NavigationController",
        bindings: dict[KeyCombo, KeyAction] | None = None,
    ) -> None:
        self.controller = controller
        self.bindings = KEY_BINDINGS if bindings is None else bindings

    def handle(
        self,
        key: str,
        *,
        alt: bool = False,
        ctrl: bool = False,
        shift: bool = False,
    ) -> bool:
        """Run the bound action; returns whether the key was consumed."""
        action = self.bindings.get(KeyCombo(key, alt=alt, ctrl=ctrl, shift=shift))
        if action is None or not self.controller.can_go_back():
            return False
        logger.debug("Key %s mapped to navigation", key)
        action(self.controller)
        return True
