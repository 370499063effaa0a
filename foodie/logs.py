import asyncio
import logging
import re
from typing import TYPE_CHECKING

from rich.logging import RichHandler

from foodie.config import Config

if TYPE_CHECKING:
    from foodie.hub import RecipeHub


logger = logging.getLogger(__name__)


ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def setup_logging(config: Config) -> None:
    """Rich console logging on the root logger. Safe to call repeatedly."""
    level = getattr(logging, config.log_level.upper().strip(), logging.INFO)
    handler = RichHandler(rich_tracebacks=config.debug, show_path=config.debug)
    handler.setLevel(level)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers = []
        lg.setLevel(level)
        lg.propagate = True


class BroadcastHandler(logging.Handler):
    """Forwards log lines to every client on the recipe push channel."""

    def __init__(
        self,
        hub: "RecipeHub",
        loop: asyncio.AbstractEventLoop,
        *,
        ansi_strip: bool = True,
        to_html: bool = False,
    ) -> None:
        super().__init__()
        self.hub = hub
        self.loop = loop
        self.ansi_strip = ansi_strip
        self.to_html = to_html
        self.tasks: set[asyncio.Task[None]] = set()
        self.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        # Our own records would feed straight back into the hub.
        if record.name.startswith(("foodie.hub", __name__)) or self.loop.is_closed():
            return
        try:
            output = self.format(record)
            if self.ansi_strip:
                output = ANSI_ESCAPE.sub("", output)
            if self.to_html:
                output = output.replace("\n", "<br>")
            self.loop.call_soon_threadsafe(self._schedule, output)
        except Exception:
            self.handleError(record)

    def _schedule(self, output: str) -> None:
        task = self.loop.create_task(self.hub.broadcast("terminalOutput", output))
        self.tasks.add(task)
        task.add_done_callback(self._done)

    def _done(self, task: "asyncio.Task[None]") -> None:
        self.tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Could not broadcast terminal output: %r", error)


def install_broadcast(config: Config, hub: "RecipeHub") -> BroadcastHandler | None:
    if not config.terminal_output_capture:
        return None
    handler = BroadcastHandler(
        hub,
        asyncio.get_running_loop(),
        ansi_strip=config.terminal_output_ansi_strip,
        to_html=config.terminal_output_to_html,
    )
    logging.getLogger().addHandler(handler)
    return handler
