"""Domain errors."""


class SessionCreationError(Exception):
    """A session could not be created; no state was changed."""


class DuplicateSessionError(SessionCreationError):
    """A session with the same id already exists on this connection."""

    def __init__(self, session_id) -> None:
        super().__init__("Duplicate session ID.")
        self.session_id = session_id


class SessionLimitError(SessionCreationError):
    """A connection or server session limit was reached."""
