"""Remote shell port - interface for the SSH adapter."""

from collections.abc import Callable
from typing import Protocol

from ..values import Credentials, ShellFailure, TerminalDimensions


class ShellEventHandler(Protocol):
    """Callbacks an adapter invokes from its own I/O completion points.

    Called synchronously on the event loop. ``on_closed`` fires at most
    once and nothing fires after it.
    """

    def on_ready(self) -> None: ...

    def on_shell_open(self) -> None: ...

    def on_data(self, data: bytes) -> None: ...

    def on_error(self, failure: ShellFailure) -> None: ...

    def on_closed(self) -> None: ...


class RemoteShellPort(Protocol):
    """One outbound authenticated shell connection.

    Never reused: after ``close`` or an error the instance is dead.
    """

    def subscribe(self, handler: ShellEventHandler) -> None:
        """Set the single event subscriber."""
        ...

    async def open(self, credentials: Credentials) -> None:
        """Connect and authenticate. Failures go to ``on_error``."""
        ...

    async def request_shell(self, dimensions: TerminalDimensions) -> None:
        """Open an interactive PTY shell. Failures go to ``on_error``."""
        ...

    def write(self, data: bytes) -> None:
        """Send input; silently dropped unless the shell is writable."""
        ...

    def resize(self, dimensions: TerminalDimensions) -> None:
        """Change remote PTY geometry; no-op without a shell."""
        ...

    def pause_reading(self) -> None:
        """Stop delivering ``on_data`` until ``resume_reading``."""
        ...

    def resume_reading(self) -> None:
        """Resume delivering shell output."""
        ...

    def close(self) -> None:
        """Close shell and connection. Idempotent."""
        ...

    @property
    def is_ready(self) -> bool:
        """True once authenticated and not yet closed."""
        ...


RemoteShellFactory = Callable[[], RemoteShellPort]
