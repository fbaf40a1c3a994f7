"""FastAPI WebSocket adapter implementing ConnectionPort."""

import json
import logging
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect, WebSocketState

logger = logging.getLogger(__name__)


class FastAPIWebSocketAdapter:
    """Adapts a FastAPI ``WebSocket`` to the ``ConnectionPort`` protocol.

    Text frames are decoded as JSON objects; binary frames are passed
    through as bytes. Text that is not a JSON object is dropped.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket
        self._closed = False

    async def send_message(self, message: dict[str, Any]) -> None:
        await self._websocket.send_json(message)

    async def receive(self) -> dict[str, Any] | bytes:
        while True:
            frame = await self._websocket.receive()
            if frame["type"] == "websocket.disconnect":
                self._closed = True
                raise WebSocketDisconnect(frame.get("code", 1000))

            if frame.get("bytes") is not None:
                return frame["bytes"]

            text = frame.get("text")
            if text is None:
                continue
            try:
                message = json.loads(text)
            except json.JSONDecodeError:
                logger.warning("Dropping non-JSON text frame size=%d", len(text))
                continue
            if isinstance(message, dict):
                return message
            logger.warning("Dropping JSON frame that is not an object")

    async def close(self, code: int = 1000) -> None:
        if self._closed:
            return
        self._closed = True
        if self._websocket.application_state != WebSocketState.DISCONNECTED:
            await self._websocket.close(code=code)

    def is_connected(self) -> bool:
        return (
            not self._closed
            and self._websocket.client_state == WebSocketState.CONNECTED
            and self._websocket.application_state == WebSocketState.CONNECTED
        )
