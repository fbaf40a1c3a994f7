"""Relay service - routes client messages to per-connection session tables."""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from shellrelay.domain import (
    ConnectionId,
    DuplicateSessionError,
    RemoteShellFactory,
    SessionCreationError,
    SessionId,
    SessionLimitChecker,
    SessionLimitError,
    TerminalDimensions,
)

from .. import messages
from ..ports import ConnectionPort
from .connection_context import ConnectionContext

logger = logging.getLogger(__name__)

# Constants
HEARTBEAT_INTERVAL = 25  # seconds
MAX_INPUT_SIZE = 4096  # characters per session:input

INVALID_SETTINGS_MESSAGE = "Invalid connection settings."
INPUT_TOO_LARGE_MESSAGE = "Input too large."


class RelayService:
    """Bridges client connections and remote shell sessions.

    Owns the outer registry of connection contexts; each context owns its
    own session table, so session ids are only ever resolved within the
    connection that sent them.
    """

    def __init__(
        self,
        shell_factory: RemoteShellFactory,
        limit_checker: SessionLimitChecker | None = None,
        default_dimensions: TerminalDimensions | None = None,
        heartbeat_interval: float = HEARTBEAT_INTERVAL,
        max_input_size: int = MAX_INPUT_SIZE,
    ) -> None:
        self._shell_factory = shell_factory
        self._limit_checker = limit_checker or SessionLimitChecker()
        self._default_dimensions = default_dimensions or TerminalDimensions.default()
        self._heartbeat_interval = heartbeat_interval
        self._max_input_size = max_input_size
        self._contexts: dict[ConnectionId, ConnectionContext] = {}

    # Registry

    def open_connection(self) -> ConnectionContext:
        """Create the context for a newly accepted connection."""
        context = ConnectionContext(ConnectionId.generate(), self._shell_factory)
        self._contexts[context.id] = context
        logger.info("Connection opened connection_id=%s", context.id)
        return context

    def close_connection(self, connection_id: ConnectionId) -> None:
        """Tear down a connection and every session it owns."""
        context = self._contexts.pop(connection_id, None)
        if context is None:
            return
        closed = context.close()
        logger.info(
            "Connection closed connection_id=%s sessions_closed=%d",
            connection_id,
            closed,
        )

    def get_context(self, connection_id: ConnectionId) -> ConnectionContext | None:
        return self._contexts.get(connection_id)

    def connection_count(self) -> int:
        return len(self._contexts)

    def session_count(self) -> int:
        return sum(len(context.sessions) for context in self._contexts.values())

    def close_all(self) -> None:
        """Close every connection (server shutdown)."""
        for connection_id in list(self._contexts):
            self.close_connection(connection_id)

    # Connection handling

    async def serve(self, connection: ConnectionPort) -> None:
        """Serve one client connection until it goes away."""
        context = self.open_connection()
        read_task = asyncio.create_task(self._read_loop(context, connection))
        write_task = asyncio.create_task(self._write_loop(context, connection))
        heartbeat_task = asyncio.create_task(self._heartbeat_loop(context))
        tasks = (read_task, write_task, heartbeat_task)

        try:
            # The connection ends when either the reader or the writer stops
            await asyncio.wait((read_task, write_task), return_when=asyncio.FIRST_COMPLETED)
        finally:
            self.close_connection(context.id)
            for task in tasks:
                task.cancel()
            results = await asyncio.gather(*tasks, return_exceptions=True)

        error = results[0]
        if isinstance(error, Exception):
            raise error

    async def _read_loop(self, context: ConnectionContext, connection: ConnectionPort) -> None:
        """Receive client messages and dispatch them in arrival order."""
        while connection.is_connected():
            try:
                message = await connection.receive()
            except Exception:
                logger.debug("Receive ended connection_id=%s", context.id, exc_info=True)
                break

            if isinstance(message, dict):
                self.handle_message(context, message)
            else:
                logger.warning(
                    "Ignoring binary frame connection_id=%s size=%d", context.id, len(message)
                )

    async def _write_loop(self, context: ConnectionContext, connection: ConnectionPort) -> None:
        """Drain the outbound queue; the only task that sends to the client."""
        while True:
            message = await context.next_message()
            if message is None:
                return
            try:
                await connection.send_message(message)
            except Exception:
                logger.debug("Send failed connection_id=%s", context.id, exc_info=True)
                return

    async def _heartbeat_loop(self, context: ConnectionContext) -> None:
        """Send periodic heartbeat pings."""
        if self._heartbeat_interval <= 0:
            return
        while not context.is_closed:
            await asyncio.sleep(self._heartbeat_interval)
            context.emit({"type": messages.PING})

    # Message dispatch

    def handle_message(self, context: ConnectionContext, message: dict[str, Any]) -> None:
        """Route one decoded client message."""
        msg_type = message.get("type")

        if msg_type == messages.SESSION_CREATE:
            self._handle_create(context, message)
        elif msg_type == messages.SESSION_INPUT:
            self._handle_input(context, message)
        elif msg_type == messages.SESSION_RESIZE:
            self._handle_resize(context, message)
        elif msg_type == messages.SESSION_DISCONNECT:
            self._handle_disconnect(context, message)
        elif msg_type == messages.PING:
            context.emit({"type": messages.PONG})
        elif msg_type == messages.PONG:
            pass
        else:
            logger.warning("Unknown message type connection_id=%s type=%s", context.id, msg_type)

    def _handle_create(self, context: ConnectionContext, message: dict[str, Any]) -> None:
        raw_id = message.get("sessionId")
        if not isinstance(raw_id, str) or not raw_id:
            logger.warning("Create without session id connection_id=%s", context.id)
            return
        session_id = SessionId(raw_id)

        try:
            if session_id in context.sessions:
                raise DuplicateSessionError(session_id)
            self._check_limits(context)
            payload = messages.CreateSessionMessage.model_validate(message)
            credentials = payload.credentials.to_credentials(self._default_dimensions)
            context.sessions.create_session(session_id, credentials)
        except SessionCreationError as e:
            logger.warning(
                "Session create rejected connection_id=%s session_id=%s reason=%s",
                context.id,
                session_id,
                e,
            )
            context.reject(session_id, str(e))
            return
        except ValidationError as e:
            # Only field locations: the input may contain secrets
            fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            logger.warning(
                "Invalid create payload connection_id=%s session_id=%s fields=%s",
                context.id,
                session_id,
                fields,
            )
            context.reject(session_id, INVALID_SETTINGS_MESSAGE)
            return
        except ValueError as e:
            logger.warning(
                "Invalid credentials connection_id=%s session_id=%s error=%s",
                context.id,
                session_id,
                e,
            )
            context.reject(session_id, INVALID_SETTINGS_MESSAGE)
            return

        logger.info(
            "Session created connection_id=%s session_id=%s target=%s",
            context.id,
            session_id,
            credentials.endpoint,
        )

    def _check_limits(self, context: ConnectionContext) -> None:
        result = self._limit_checker.can_create_session(
            connection_session_count=len(context.sessions),
            total_session_count=self.session_count(),
        )
        if not result.allowed:
            raise SessionLimitError(result.reason)

    def _handle_input(self, context: ConnectionContext, message: dict[str, Any]) -> None:
        try:
            payload = messages.InputMessage.model_validate(message)
        except ValidationError:
            logger.debug("Malformed input message connection_id=%s", context.id)
            return

        session = context.sessions.lookup(SessionId(payload.session_id))
        if session is None or not payload.data:
            return

        if len(payload.data) > self._max_input_size:
            logger.warning(
                "Input too large connection_id=%s session_id=%s size=%d",
                context.id,
                session.id,
                len(payload.data),
            )
            context.reject(session.id, INPUT_TOO_LARGE_MESSAGE)
            return

        session.submit_input(payload.data.encode("utf-8"))

    def _handle_resize(self, context: ConnectionContext, message: dict[str, Any]) -> None:
        try:
            payload = messages.ResizeMessage.model_validate(message)
        except ValidationError:
            logger.debug("Malformed resize message connection_id=%s", context.id)
            return

        session = context.sessions.lookup(SessionId(payload.session_id))
        if session is None:
            return

        dimensions = TerminalDimensions.clamped(payload.cols, payload.rows)
        session.resize(dimensions)
        logger.debug(
            "Resize session_id=%s cols=%d rows=%d",
            session.id,
            dimensions.cols,
            dimensions.rows,
        )

    def _handle_disconnect(self, context: ConnectionContext, message: dict[str, Any]) -> None:
        try:
            payload = messages.DisconnectMessage.model_validate(message)
        except ValidationError:
            logger.debug("Malformed disconnect message connection_id=%s", context.id)
            return

        if context.sessions.remove_and_close(SessionId(payload.session_id)) is not None:
            logger.info(
                "Session disconnect requested connection_id=%s session_id=%s",
                context.id,
                payload.session_id,
            )
