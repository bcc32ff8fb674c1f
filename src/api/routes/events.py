"""Real-time notification gateway.

Clients connect to /events and immediately receive a `connection` greeting.
They then receive every broadcast (e.g. `created` after a cat is stored) and
may send `{"event": ..., "data": ...}` frames, which are answered with the
same event name and data.
"""

import logging

from fastapi import APIRouter, Depends, WebSocket
from pydantic import ValidationError as PydanticValidationError
from starlette.websockets import WebSocketDisconnect

from adapter.websocket.subscriber import WebSocketSubscriber
from api.dependencies import get_notification_hub
from api.models import EventMessage
from services.notification_hub import NotificationHub

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

ERROR_EVENT = "error"


@router.websocket("/events")
async def events(websocket: WebSocket, hub: NotificationHub = Depends(get_notification_hub)):
    await websocket.accept()
    subscriber = WebSocketSubscriber(websocket)
    logger.info("WebSocket accepted", extra={
        "subscriberId": subscriber.id,
        "client": str(websocket.client) if websocket.client else None,
        "userAgent": websocket.headers.get("user-agent"),
    })
    await hub.subscribe(subscriber)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = EventMessage.model_validate_json(raw)
            except PydanticValidationError:
                await websocket.send_json({"event": ERROR_EVENT, "data": "Malformed message"})
                continue
            await websocket.send_json(hub.handle(message.event, message.data))
    except WebSocketDisconnect:
        pass
    finally:
        hub.unsubscribe(subscriber)
