"""Push channel: tells every connected client when the recipe book changes."""

import logging
from typing import Any

from starlette.websockets import WebSocket, WebSocketDisconnect


logger = logging.getLogger(__name__)


RECIPE_ADDED = "recipeAdded"
RECIPE_UPDATED = "recipeUpdated"
RECIPE_DELETED = "recipeDeleted"


class RecipeHub:
    def __init__(self) -> None:
        self.clients: set[WebSocket] = set()

    def __len__(self) -> int:
        return len(self.clients)

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self.clients.add(ws)
        logger.info("A user connected: %s", id(ws))

    def disconnect(self, ws: WebSocket) -> None:
        if ws in self.clients:
            self.clients.discard(ws)
            logger.info("User disconnected: %s", id(ws))

    async def broadcast(self, event: str, data: Any) -> None:
        for ws in list(self.clients):
            try:
                await ws.send_json({"event": event, "data": data})
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.debug("Dropping client %s: %r", id(ws), e)
                self.disconnect(ws)
