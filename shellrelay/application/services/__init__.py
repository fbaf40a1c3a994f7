"""Application services - use case implementations."""

from .connection_context import ConnectionContext
from .relay_service import RelayService

__all__ = [
    "ConnectionContext",
    "RelayService",
]
