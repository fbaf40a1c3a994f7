"""Pure domain layer - no infrastructure dependencies."""

# Entities
from .entities import Session, SessionListener, SessionState, SessionTable

# Errors
from .errors import DuplicateSessionError, SessionCreationError, SessionLimitError

# Ports
from .ports import RemoteShellFactory, RemoteShellPort, ShellEventHandler

# Services
from .services import (
    SessionLimitChecker,
    SessionLimitConfig,
    SessionLimitResult,
    TranslatedError,
    categorize,
    translate_failure,
)

# Value Objects
from .values import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    DEFAULT_SSH_PORT,
    MAX_COLS,
    MAX_ROWS,
    MIN_COLS,
    MIN_ROWS,
    AuthMethod,
    ConnectionId,
    Credentials,
    ErrorCategory,
    FailureStage,
    SessionId,
    ShellFailure,
    TerminalDimensions,
)

__all__ = [
    # Values
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
    # Entities
    "Session",
    "SessionState",
    "SessionListener",
    "SessionTable",
    # Errors
    "SessionCreationError",
    "DuplicateSessionError",
    "SessionLimitError",
    # Services
    "translate_failure",
    "categorize",
    "TranslatedError",
    "SessionLimitChecker",
    "SessionLimitConfig",
    "SessionLimitResult",
    # Ports
    "RemoteShellPort",
    "RemoteShellFactory",
    "ShellEventHandler",
]
