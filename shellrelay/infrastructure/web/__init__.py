"""Web infrastructure - transport adapters."""

from .websocket_adapter import FastAPIWebSocketAdapter

__all__ = [
    "FastAPIWebSocketAdapter",
]
