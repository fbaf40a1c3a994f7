"""Domain ports - interfaces for infrastructure to implement."""

from .shell_port import RemoteShellFactory, RemoteShellPort, ShellEventHandler

__all__ = [
    "RemoteShellPort",
    "RemoteShellFactory",
    "ShellEventHandler",
]
