"""Session entity - one logical terminal tab bound to one remote shell."""

import asyncio
import codecs
import logging
from enum import Enum
from typing import Protocol

from ..ports import RemoteShellPort
from ..values import Credentials, FailureStage, SessionId, ShellFailure, TerminalDimensions

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    PENDING = "pending"
    CONNECTED = "connected"
    CLOSED = "closed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.CLOSED, SessionState.FAILED)


class SessionListener(Protocol):
    """Receives session notifications, keyed by the session itself."""

    def session_connected(self, session: "Session") -> None: ...

    def session_data(self, session: "Session", text: str) -> None: ...

    def session_failed(self, session: "Session", failure: ShellFailure) -> None: ...

    def session_closed(self, session: "Session") -> None: ...


class Session:
    """Drives one remote shell adapter through its lifecycle.

    State machine: ``pending -> connected -> closed`` or ``pending -> failed``.
    Terminal states are final; any adapter event arriving afterwards is
    ignored, so a late connect or error callback can never resurrect a
    session that was already torn down.

    The session implements ``ShellEventHandler`` for its adapter and reports
    upward through a ``SessionListener``.
    """

    def __init__(
        self,
        session_id: SessionId,
        credentials: Credentials,
        shell: RemoteShellPort,
        listener: SessionListener,
    ) -> None:
        self._id = session_id
        self._credentials = credentials
        self._shell = shell
        self._listener = listener
        self._state = SessionState.PENDING
        self._dimensions = credentials.dimensions
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._task: asyncio.Task[None] | None = None
        shell.subscribe(self)

    @property
    def id(self) -> SessionId:
        return self._id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def dimensions(self) -> TerminalDimensions:
        return self._dimensions

    @property
    def is_connected(self) -> bool:
        return self._state is SessionState.CONNECTED

    def start(self) -> None:
        """Begin connecting in the background. Returns immediately."""
        if self._task is not None:
            raise RuntimeError(f"Session {self._id} already started")
        self._task = asyncio.create_task(self._establish(), name=f"session-{self._id}")

    async def _establish(self) -> None:
        try:
            await self._shell.open(self._credentials)
            if self._state is not SessionState.PENDING or not self._shell.is_ready:
                return
            await self._shell.request_shell(self._dimensions)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Adapters report through on_error; anything escaping is a bug there
            logger.exception("Unexpected error opening session_id=%s", self._id)
            self.on_error(ShellFailure(str(e) or type(e).__name__, stage=FailureStage.CONNECT))

    def submit_input(self, data: bytes) -> None:
        """Forward input to the shell; dropped unless connected."""
        if self._state is SessionState.CONNECTED:
            self._shell.write(data)

    def resize(self, dimensions: TerminalDimensions) -> None:
        """Forward new geometry; dropped while the shell is not open."""
        if self._state is not SessionState.CONNECTED:
            return
        if dimensions == self._dimensions:
            return
        self._dimensions = dimensions
        self._shell.resize(dimensions)

    def pause_output(self) -> None:
        """Stop reading shell output while the client is behind."""
        if not self._state.is_terminal:
            self._shell.pause_reading()

    def resume_output(self) -> None:
        if not self._state.is_terminal:
            self._shell.resume_reading()

    def disconnect(self) -> None:
        """Tear the session down from any state. Idempotent."""
        if not self._state.is_terminal:
            self._state = SessionState.CLOSED
            logger.info("Session disconnected session_id=%s", self._id)
        self._cancel_establish()
        self._shell.close()

    def _cancel_establish(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        if task is asyncio.current_task():
            return
        task.cancel()

    # ShellEventHandler

    def on_ready(self) -> None:
        if self._state.is_terminal:
            return
        logger.info(
            "Remote connection ready session_id=%s target=%s",
            self._id,
            self._credentials.endpoint,
        )

    def on_shell_open(self) -> None:
        if self._state is not SessionState.PENDING:
            return
        self._state = SessionState.CONNECTED
        logger.info("Shell opened session_id=%s", self._id)
        self._listener.session_connected(self)

    def on_data(self, data: bytes) -> None:
        if self._state is not SessionState.CONNECTED:
            return
        text = self._decoder.decode(data)
        if text:
            self._listener.session_data(self, text)

    def on_error(self, failure: ShellFailure) -> None:
        if self._state.is_terminal:
            return
        self._state = SessionState.FAILED
        logger.warning(
            "Session failed session_id=%s stage=%s code=%s error=%s",
            self._id,
            failure.stage.value,
            failure.code,
            failure.message,
        )
        self._cancel_establish()
        self._shell.close()
        self._listener.session_failed(self, failure)

    def on_closed(self) -> None:
        if self._state.is_terminal:
            return
        if self._state is SessionState.CONNECTED:
            # A truncated multi-byte sequence still reaches the client as U+FFFD
            tail = self._decoder.decode(b"", final=True)
            if tail:
                self._listener.session_data(self, tail)
        self._state = SessionState.CLOSED
        logger.info("Session closed by remote session_id=%s", self._id)
        self._cancel_establish()
        self._listener.session_closed(self)
