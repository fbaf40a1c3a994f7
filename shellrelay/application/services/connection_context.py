"""Per-connection context: session table plus ordered outbound queue."""

import asyncio
import logging
from typing import Any

from shellrelay.domain import (
    ConnectionId,
    RemoteShellFactory,
    Session,
    SessionId,
    SessionTable,
    ShellFailure,
    translate_failure,
)

from ..messages import closed_message, connected_message, data_message, error_message

logger = logging.getLogger(__name__)

# Outbound flow control, in queued messages
OUTBOX_HIGH_WATER = 256
OUTBOX_LOW_WATER = 64


class ConnectionContext:
    """Everything one client connection owns.

    Session notifications are turned into outbound messages and queued in
    arrival order; a single writer drains the queue to the transport, so
    adapter callbacks never block on network I/O. Once closed, nothing
    more is queued: the client is gone.

    When the queue reaches ``high_water`` every shell stops being read
    until the writer has drained it to ``low_water``; a slow client
    throttles its shells instead of growing the queue.
    """

    def __init__(
        self,
        connection_id: ConnectionId,
        shell_factory: RemoteShellFactory,
        high_water: int = OUTBOX_HIGH_WATER,
        low_water: int = OUTBOX_LOW_WATER,
    ) -> None:
        if not 0 <= low_water < high_water:
            raise ValueError("low_water must be non-negative and below high_water")
        self._id = connection_id
        self._outbox: asyncio.Queue[dict[str, Any] | None] = asyncio.Queue()
        self._closed = False
        self._paused = False
        self._high_water = high_water
        self._low_water = low_water
        self._sessions = SessionTable(shell_factory, self)

    @property
    def id(self) -> ConnectionId:
        return self._id

    @property
    def sessions(self) -> SessionTable:
        return self._sessions

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def output_paused(self) -> bool:
        return self._paused

    def emit(self, message: dict[str, Any]) -> None:
        """Queue a message for the client."""
        if self._closed:
            return
        self._outbox.put_nowait(message)
        if not self._paused and self._outbox.qsize() >= self._high_water:
            self._pause_output()

    def reject(self, session_id: SessionId | str, message: str) -> None:
        """Report a locally refused request for ``session_id``."""
        self.emit(error_message(session_id, message))

    async def next_message(self) -> dict[str, Any] | None:
        """Wait for the next outbound message; ``None`` once closed."""
        message = await self._outbox.get()
        if self._paused and not self._closed and self._outbox.qsize() <= self._low_water:
            self._resume_output()
        return message

    def pending_messages(self) -> int:
        return self._outbox.qsize()

    def close(self) -> int:
        """Close every session silently and stop the outbound queue.

        Returns:
            Number of sessions that were torn down.
        """
        if self._closed:
            return 0
        self._closed = True
        closed = self._sessions.close_all()
        self._outbox.put_nowait(None)
        return closed

    def _pause_output(self) -> None:
        self._paused = True
        logger.debug(
            "Output paused connection_id=%s queued=%d", self._id, self._outbox.qsize()
        )
        for session in self._live_sessions():
            session.pause_output()

    def _resume_output(self) -> None:
        self._paused = False
        logger.debug(
            "Output resumed connection_id=%s queued=%d", self._id, self._outbox.qsize()
        )
        for session in self._live_sessions():
            session.resume_output()

    def _live_sessions(self) -> list[Session]:
        sessions = (self._sessions.lookup(session_id) for session_id in self._sessions)
        return [session for session in sessions if session is not None]

    # SessionListener

    def session_connected(self, session: Session) -> None:
        self.emit(connected_message(session.id))
        if self._paused:
            session.pause_output()

    def session_data(self, session: Session, text: str) -> None:
        self.emit(data_message(session.id, text))

    def session_failed(self, session: Session, failure: ShellFailure) -> None:
        translated = translate_failure(failure, session.credentials)
        logger.info(
            "Session error connection_id=%s session_id=%s category=%s",
            self._id,
            session.id,
            translated.category.value,
        )
        self.emit(error_message(session.id, translated.message))

    def session_closed(self, session: Session) -> None:
        self.emit(closed_message(session.id))
