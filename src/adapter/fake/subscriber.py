"""In-memory Subscriber that records deliveries, for hub tests."""

import asyncio
from typing import Any


class FakeSubscriber:
    def __init__(self, subscriber_id: str, fail_with: Exception | None = None, delay: float = 0.0):
        self.id = subscriber_id
        self.received: list[tuple[str, Any]] = []
        self.fail_with = fail_with
        self.delay = delay

    async def send(self, event: str, data: Any) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        self.received.append((event, data))

    def events(self, name: str) -> list[Any]:
        return [data for event, data in self.received if event == name]
