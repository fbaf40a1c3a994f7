"""Application layer ports - interfaces for presentation layer."""

from .connection_port import ConnectionPort

__all__ = [
    "ConnectionPort",
]
