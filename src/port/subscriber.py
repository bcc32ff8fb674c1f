"""Port definitions for real-time notification subscribers and the hub that fans out to them."""

from typing import Any, Protocol


class Subscriber(Protocol):
    id: str

    async def send(self, event: str, data: Any) -> None:
        """Deliver one named event. May raise on a dead or slow connection."""
        ...


class Notifier(Protocol):
    def publish(self, event: str, data: Any) -> None:
        """Schedule delivery to every subscriber and return immediately."""
        ...
