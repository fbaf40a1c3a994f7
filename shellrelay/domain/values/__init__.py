"""Domain value objects - immutable data structures."""

from .credentials import DEFAULT_SSH_PORT, AuthMethod, Credentials
from .error_category import ErrorCategory
from .identifiers import ConnectionId, SessionId
from .shell_failure import FailureStage, ShellFailure
from .terminal_dimensions import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    MAX_COLS,
    MAX_ROWS,
    MIN_COLS,
    MIN_ROWS,
    TerminalDimensions,
)

__all__ = [
    "TerminalDimensions",
    "MIN_COLS",
    "MAX_COLS",
    "MIN_ROWS",
    "MAX_ROWS",
    "DEFAULT_COLS",
    "DEFAULT_ROWS",
    "SessionId",
    "ConnectionId",
    "Credentials",
    "AuthMethod",
    "DEFAULT_SSH_PORT",
    "ShellFailure",
    "FailureStage",
    "ErrorCategory",
]
