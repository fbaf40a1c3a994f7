"""Per-connection registry of sessions."""

import logging
from collections.abc import Iterator

from ..errors import DuplicateSessionError
from ..ports import RemoteShellFactory
from ..values import Credentials, SessionId, ShellFailure
from .session import Session, SessionListener

logger = logging.getLogger(__name__)


class SessionTable:
    """Maps session ids to live sessions for one client connection.

    Only ``pending`` and ``connected`` sessions are ever present: a session
    reaching a terminal state is removed in the same callback that moved
    it there, before the notification is passed on.
    """

    def __init__(self, shell_factory: RemoteShellFactory, listener: SessionListener) -> None:
        self._shell_factory = shell_factory
        self._listener = listener
        self._sessions: dict[SessionId, Session] = {}

    def create_session(self, session_id: SessionId, credentials: Credentials) -> Session:
        """Insert a pending session and start connecting it.

        Raises:
            DuplicateSessionError: If ``session_id`` is already present.
        """
        if session_id in self._sessions:
            raise DuplicateSessionError(session_id)

        session = Session(session_id, credentials, self._shell_factory(), self)
        self._sessions[session_id] = session
        session.start()
        return session

    def lookup(self, session_id: SessionId) -> Session | None:
        return self._sessions.get(session_id)

    def remove_and_close(self, session_id: SessionId) -> Session | None:
        """Remove a session and disconnect it. Misses are ignored."""
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.disconnect()
        return session

    def close_all(self) -> int:
        """Disconnect every session, suppressing teardown errors.

        Returns:
            Number of sessions that were closed.
        """
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            try:
                session.disconnect()
            except Exception:
                logger.debug("Error closing session_id=%s", session.id, exc_info=True)
        return len(sessions)

    def _discard(self, session: Session) -> None:
        # Identity check: an id may have been reused after this session left
        if self._sessions.get(session.id) is session:
            del self._sessions[session.id]

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[SessionId]:
        return iter(list(self._sessions))

    # SessionListener

    def session_connected(self, session: Session) -> None:
        self._listener.session_connected(session)

    def session_data(self, session: Session, text: str) -> None:
        self._listener.session_data(session, text)

    def session_failed(self, session: Session, failure: ShellFailure) -> None:
        self._discard(session)
        self._listener.session_failed(session, failure)

    def session_closed(self, session: Session) -> None:
        self._discard(session)
        self._listener.session_closed(session)
