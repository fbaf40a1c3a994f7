"""Remote shell adapter backed by asyncssh."""

import asyncio
import errno
import logging
import socket
from dataclasses import dataclass
from enum import Enum
from typing import Any

import asyncssh

from shellrelay.domain import (
    Credentials,
    FailureStage,
    ShellEventHandler,
    ShellFailure,
    TerminalDimensions,
)

logger = logging.getLogger(__name__)

# Defaults
CONNECT_TIMEOUT = 10.0  # seconds
KEEPALIVE_INTERVAL = 15.0  # seconds
KEEPALIVE_COUNT_MAX = 3
TERM_TYPE = "xterm-256color"

_UNREACHABLE_ERRNOS = frozenset({errno.EHOSTUNREACH, errno.ENETUNREACH, errno.EHOSTDOWN})


@dataclass(frozen=True, slots=True)
class SSHOptions:
    """Connection tuning shared by every adapter."""

    connect_timeout: float = CONNECT_TIMEOUT
    keepalive_interval: float = KEEPALIVE_INTERVAL
    keepalive_count_max: int = KEEPALIVE_COUNT_MAX
    term_type: str = TERM_TYPE
    # None disables host key checking
    known_hosts: str | None = None


class AdapterState(str, Enum):
    CONNECTING = "connecting"
    READY = "ready"
    SHELL_OPEN = "shell-open"
    CLOSED = "closed"
    ERROR = "error"


def classify_exception(exc: BaseException, stage: FailureStage) -> ShellFailure:
    """Turn an asyncssh/socket exception into a raw failure with a code."""
    message = str(exc) or type(exc).__name__

    if isinstance(exc, (asyncssh.PermissionDenied, asyncssh.KeyImportError)):
        return ShellFailure(message, stage=stage, code="AUTH")
    if isinstance(exc, asyncssh.HostKeyNotVerifiable):
        return ShellFailure(f"Host key verification failed: {message}", stage=stage, code="HOSTKEY")
    if isinstance(exc, asyncssh.ChannelOpenError):
        return ShellFailure(message, stage=FailureStage.SHELL, code="CHANNEL")
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return ShellFailure(message or "Timed out", stage=stage, code="ETIMEDOUT")
    if isinstance(exc, socket.gaierror):
        return ShellFailure(message, stage=stage, code="ENOTFOUND")
    if isinstance(exc, ConnectionRefusedError):
        return ShellFailure(message, stage=stage, code="ECONNREFUSED")
    if isinstance(exc, OSError):
        if exc.errno in _UNREACHABLE_ERRNOS:
            return ShellFailure(message, stage=stage, code="EHOSTUNREACH")
        if exc.errno == errno.ETIMEDOUT:
            return ShellFailure(message, stage=stage, code="ETIMEDOUT")
        return ShellFailure(message, stage=stage)
    return ShellFailure(message, stage=stage)


class _ShellClient(asyncssh.SSHClient):
    """Reports connection loss (including keepalive timeouts) to the adapter."""

    def __init__(self, owner: "AsyncSSHShell") -> None:
        self._owner = owner

    def connection_lost(self, exc: Exception | None) -> None:
        self._owner._connection_lost(exc)


class _ShellChannel(asyncssh.SSHClientSession):
    """Receives shell channel callbacks; stdout and stderr share one stream."""

    def __init__(self, owner: "AsyncSSHShell") -> None:
        self._owner = owner
        self._chan: asyncssh.SSHClientChannel | None = None

    def connection_made(self, chan: asyncssh.SSHClientChannel) -> None:
        self._chan = chan

    def session_started(self) -> None:
        self._owner._shell_started(self._chan)

    def data_received(self, data: bytes, datatype: asyncssh.DataType) -> None:
        self._owner._data_received(data)

    def connection_lost(self, exc: Exception | None) -> None:
        self._owner._channel_lost(exc)


class AsyncSSHShell:
    """One outbound SSH connection with at most one interactive shell.

    Implements ``RemoteShellPort``. Every failure is reported through the
    subscribed handler's ``on_error`` followed by ``on_closed``; nothing
    fires after ``on_closed``. The instance is never reconnected.
    """

    def __init__(self, options: SSHOptions | None = None) -> None:
        self._options = options or SSHOptions()
        self._handler: ShellEventHandler | None = None
        self._state = AdapterState.CONNECTING
        self._closed = False
        self._conn: asyncssh.SSHClientConnection | None = None
        self._chan: asyncssh.SSHClientChannel | None = None
        self._dimensions: TerminalDimensions | None = None
        self._reading_paused = False
        self._endpoint = "<unopened>"

    @property
    def state(self) -> AdapterState:
        return self._state

    @property
    def dimensions(self) -> TerminalDimensions | None:
        return self._dimensions

    @property
    def is_ready(self) -> bool:
        return not self._closed and self._state in (AdapterState.READY, AdapterState.SHELL_OPEN)

    def subscribe(self, handler: ShellEventHandler) -> None:
        self._handler = handler

    def _connect_options(self, credentials: Credentials) -> dict[str, Any]:
        options: dict[str, Any] = {
            "port": credentials.port,
            "username": credentials.username,
            "known_hosts": self._options.known_hosts,
            "keepalive_interval": self._options.keepalive_interval,
            "keepalive_count_max": self._options.keepalive_count_max,
            "client_factory": lambda: _ShellClient(self),
            # Only the supplied target and secret are used, never the relay
            # host's own keys or its ~/.ssh/config aliases and proxies
            "agent_path": None,
            "config": None,
        }
        if credentials.private_key is not None:
            key = asyncssh.import_private_key(credentials.private_key, credentials.passphrase)
            options["client_keys"] = [key]
            options["password"] = None
        else:
            options["client_keys"] = None
            options["password"] = credentials.password
        return options

    async def open(self, credentials: Credentials) -> None:
        """Connect and authenticate within the connect timeout."""
        if self._closed:
            return
        if self._state is not AdapterState.CONNECTING or self._conn is not None:
            raise RuntimeError("open() may only be called once")

        self._endpoint = credentials.endpoint
        logger.debug("SSH connecting target=%s", self._endpoint)

        try:
            options = self._connect_options(credentials)
            conn = await asyncio.wait_for(
                asyncssh.connect(credentials.host, **options),
                timeout=self._options.connect_timeout,
            )
        except asyncio.CancelledError:
            self.close()
            raise
        except Exception as e:
            self._fail(classify_exception(e, FailureStage.CONNECT))
            return

        if self._closed:
            conn.close()
            return

        self._conn = conn
        self._state = AdapterState.READY
        logger.debug("SSH authenticated target=%s", self._endpoint)
        if self._handler is not None:
            self._handler.on_ready()

    async def request_shell(self, dimensions: TerminalDimensions) -> None:
        """Open an interactive PTY shell with the given geometry."""
        if self._closed or self._state is not AdapterState.READY or self._conn is None:
            return

        self._dimensions = dimensions
        try:
            chan, _ = await self._conn.create_session(
                lambda: _ShellChannel(self),
                term_type=self._options.term_type,
                term_size=(dimensions.cols, dimensions.rows),
                encoding=None,
            )
        except asyncio.CancelledError:
            self.close()
            raise
        except Exception as e:
            self._fail(classify_exception(e, FailureStage.SHELL))
            return

        if self._closed:
            chan.close()
            return
        self._shell_started(chan)

    def write(self, data: bytes) -> None:
        chan = self._chan
        if self._state is not AdapterState.SHELL_OPEN or chan is None or chan.is_closing():
            return
        chan.write(data)

    def resize(self, dimensions: TerminalDimensions) -> None:
        chan = self._chan
        if self._state is not AdapterState.SHELL_OPEN or chan is None:
            return
        chan.change_terminal_size(dimensions.cols, dimensions.rows)
        self._dimensions = dimensions

    def pause_reading(self) -> None:
        """Stop reading the channel; the SSH window then throttles the remote."""
        self._reading_paused = True
        chan = self._chan
        if self._state is AdapterState.SHELL_OPEN and chan is not None:
            chan.pause_reading()

    def resume_reading(self) -> None:
        self._reading_paused = False
        chan = self._chan
        if self._state is AdapterState.SHELL_OPEN and chan is not None:
            chan.resume_reading()

    def close(self) -> None:
        """Close shell channel and connection. Safe from any state."""
        if self._closed:
            return
        self._closed = True
        if self._state is not AdapterState.ERROR:
            self._state = AdapterState.CLOSED

        chan, conn = self._chan, self._conn
        self._chan = None
        self._conn = None
        if chan is not None:
            try:
                chan.close()
            except Exception:
                logger.debug("Error closing channel target=%s", self._endpoint, exc_info=True)
        if conn is not None:
            try:
                conn.close()
            except Exception:
                logger.debug("Error closing connection target=%s", self._endpoint, exc_info=True)

        logger.debug("SSH closed target=%s", self._endpoint)
        if self._handler is not None:
            self._handler.on_closed()

    def _fail(self, failure: ShellFailure) -> None:
        if self._closed or self._state is AdapterState.ERROR:
            return
        self._state = AdapterState.ERROR
        if self._handler is not None:
            self._handler.on_error(failure)
        self.close()

    # asyncssh callbacks

    def _shell_started(self, chan: asyncssh.SSHClientChannel | None) -> None:
        if self._closed or self._state is not AdapterState.READY or chan is None:
            return
        self._chan = chan
        self._state = AdapterState.SHELL_OPEN
        if self._reading_paused:
            chan.pause_reading()
        if self._handler is not None:
            self._handler.on_shell_open()

    def _data_received(self, data: bytes) -> None:
        if self._closed or self._state is not AdapterState.SHELL_OPEN:
            return
        if self._handler is not None:
            self._handler.on_data(data)

    def _channel_lost(self, exc: Exception | None) -> None:
        if self._closed or self._state is not AdapterState.SHELL_OPEN:
            return
        if exc is None:
            self.close()
        else:
            self._fail(classify_exception(exc, FailureStage.STREAM))

    def _connection_lost(self, exc: Exception | None) -> None:
        # While connecting, open() reports the failure itself
        if self._closed or self._state is AdapterState.CONNECTING:
            return
        if exc is None:
            self.close()
        else:
            self._fail(classify_exception(exc, FailureStage.STREAM))


def create_shell_factory(options: SSHOptions | None = None):
    """Create a factory producing a fresh adapter per session."""
    shared = options or SSHOptions()

    def factory() -> AsyncSSHShell:
        return AsyncSSHShell(shared)

    return factory
