"""Notification hub: fans named events out to connected subscribers.

The subscriber set is the only shared mutable state. Every broadcast iterates
a snapshot of it, so subscribers joining or leaving mid-delivery never fault
the delivery loop. Deliveries run concurrently and independently; a slow or
dead subscriber only costs its own delivery.
"""

import asyncio
import logging
from typing import Any

from domain.model.errors import NotificationDeliveryError
from port.subscriber import Subscriber

logger = logging.getLogger(__name__)

CONNECTION_EVENT = "connection"
CONNECTION_GREETING = "Successfully connected to server"
DEFAULT_SEND_TIMEOUT = 5.0


class NotificationHub:
    def __init__(self, send_timeout: float | None = DEFAULT_SEND_TIMEOUT):
        self.send_timeout = send_timeout
        self._subscribers: dict[str, Subscriber] = {}
        self._pending: set[asyncio.Task] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    # ── lifecycle ────────────────────────────────────────────

    async def subscribe(self, subscriber: Subscriber) -> None:
        """Register `subscriber` and greet it, and only it."""
        self._subscribers[subscriber.id] = subscriber
        logger.info("Subscriber connected", extra={"subscriberId": subscriber.id, "subscribers": self.subscriber_count})
        await self._deliver(subscriber, CONNECTION_EVENT, CONNECTION_GREETING)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove `subscriber`. Removing an absent subscriber is a no-op."""
        if self._subscribers.pop(subscriber.id, None) is not None:
            logger.info("Subscriber disconnected", extra={"subscriberId": subscriber.id, "subscribers": self.subscriber_count})

    async def drain(self) -> None:
        """Wait for every in-flight publish to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def close(self) -> None:
        await self.drain()
        self._subscribers.clear()

    # ── delivery ─────────────────────────────────────────────

    async def broadcast(self, event: str, data: Any) -> int:
        """Deliver `data` under `event` to every current subscriber.

        Never raises for delivery problems. Returns the number of subscribers
        that received the event.
        """
        subscribers = list(self._subscribers.values())
        if not subscribers:
            logger.debug("Broadcast with no subscribers", extra={"event": event})
            return 0

        results = await asyncio.gather(*(self._deliver(s, event, data) for s in subscribers))
        delivered = sum(results)
        logger.info("Broadcast finished", extra={"event": event, "delivered": delivered, "subscribers": len(subscribers)})
        return delivered

    def publish(self, event: str, data: Any) -> None:
        """Fire-and-forget broadcast. Must be called from a running event loop."""
        task = asyncio.get_running_loop().create_task(self.broadcast(event, data))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, subscriber: Subscriber, event: str, data: Any) -> bool:
        try:
            if self.send_timeout is None:
                await subscriber.send(event, data)
            else:
                await asyncio.wait_for(subscriber.send(event, data), timeout=self.send_timeout)
            return True
        except Exception as e:
            error = NotificationDeliveryError(subscriber.id, event, e)
            logger.warning(str(error), extra={"subscriberId": subscriber.id, "event": event})
            return False

    # ── request/response ─────────────────────────────────────

    def handle(self, event: str, data: Any) -> dict:
        """Answer a subscriber-initiated message with the same event name and its data."""
        return {"event": event, "data": data}
