"""Remote shell credentials value object."""

from dataclasses import dataclass, field
from enum import Enum

from .terminal_dimensions import TerminalDimensions

DEFAULT_SSH_PORT = 22


class AuthMethod(str, Enum):
    """How the relay authenticates against the remote host."""

    PASSWORD = "password"
    PRIVATE_KEY = "privateKey"


@dataclass(frozen=True, slots=True)
class Credentials:
    """Write-once input used to open one remote shell.

    Secrets are excluded from repr so a stray log line or traceback
    never leaks them.
    """

    host: str
    username: str
    port: int = DEFAULT_SSH_PORT
    password: str | None = field(default=None, repr=False)
    private_key: str | None = field(default=None, repr=False)
    passphrase: str | None = field(default=None, repr=False)
    dimensions: TerminalDimensions = field(default_factory=TerminalDimensions.default)

    def __post_init__(self) -> None:
        if not self.host or not self.host.strip():
            raise ValueError("host is required")
        if not self.username:
            raise ValueError("username is required")
        if isinstance(self.port, bool) or not 1 <= self.port <= 65535:
            raise ValueError("port must be between 1 and 65535")
        if self.password is None and self.private_key is None:
            raise ValueError("either password or private_key is required")

    @property
    def auth_method(self) -> AuthMethod:
        if self.private_key is not None:
            return AuthMethod.PRIVATE_KEY
        return AuthMethod.PASSWORD

    @property
    def endpoint(self) -> str:
        """Loggable target description (no secrets)."""
        return f"{self.username}@{self.host}:{self.port}"
