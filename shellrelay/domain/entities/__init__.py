"""Domain entities - objects with identity and lifecycle."""

from .session import Session, SessionListener, SessionState
from .session_table import SessionTable

__all__ = [
    "Session",
    "SessionState",
    "SessionListener",
    "SessionTable",
]
