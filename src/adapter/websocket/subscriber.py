"""Subscriber backed by a Starlette WebSocket connection."""

import uuid
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState


class WebSocketSubscriber:
    def __init__(self, websocket: WebSocket, subscriber_id: str | None = None):
        self.websocket = websocket
        self.id = subscriber_id or uuid.uuid4().hex

    async def send(self, event: str, data: Any) -> None:
        if self.websocket.client_state == WebSocketState.DISCONNECTED:
            raise ConnectionError("WebSocket already disconnected")
        await self.websocket.send_json({"event": event, "data": data})
