"""Connection port - interface for the client transport."""

from typing import Any, Protocol


class ConnectionPort(Protocol):
    """One client transport connection (e.g. a WebSocket).

    Presentation layer implements this; the relay only ever sees
    decoded JSON objects or raw binary frames.
    """

    async def send_message(self, message: dict[str, Any]) -> None:
        """Send a JSON message to the client."""
        ...

    async def receive(self) -> dict[str, Any] | bytes:
        """Receive the next JSON message or binary frame."""
        ...

    async def close(self, code: int = 1000) -> None:
        """Close the connection."""
        ...

    def is_connected(self) -> bool:
        """Whether the connection is still open."""
        ...
