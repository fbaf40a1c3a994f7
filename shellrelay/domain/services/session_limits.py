"""Session limit checking service."""

from dataclasses import dataclass

# Business rules
MAX_SESSIONS_PER_CONNECTION = 32
MAX_TOTAL_SESSIONS = 256


@dataclass(frozen=True, slots=True)
class SessionLimitConfig:
    """Session limit configuration. Zero means unlimited."""

    max_per_connection: int = MAX_SESSIONS_PER_CONNECTION
    max_total: int = MAX_TOTAL_SESSIONS

    def __post_init__(self) -> None:
        if self.max_per_connection < 0:
            raise ValueError("max_per_connection cannot be negative")
        if self.max_total < 0:
            raise ValueError("max_total cannot be negative")


@dataclass(frozen=True, slots=True)
class SessionLimitResult:
    """Result of a limit check."""

    allowed: bool
    reason: str | None = None


class SessionLimitChecker:
    """Decide whether another session may be opened."""

    def __init__(self, config: SessionLimitConfig | None = None) -> None:
        self._config = config or SessionLimitConfig()

    @property
    def config(self) -> SessionLimitConfig:
        return self._config

    def can_create_session(
        self,
        connection_session_count: int,
        total_session_count: int,
    ) -> SessionLimitResult:
        """Check whether a new session can be created.

        Args:
            connection_session_count: Live sessions on the requesting connection.
            total_session_count: Live sessions across the whole server.
        """
        max_per_connection = self._config.max_per_connection
        if max_per_connection and connection_session_count >= max_per_connection:
            return SessionLimitResult(
                allowed=False,
                reason=f"Maximum sessions ({max_per_connection}) reached for this connection.",
            )

        if self._config.max_total and total_session_count >= self._config.max_total:
            return SessionLimitResult(
                allowed=False,
                reason="Server session limit reached.",
            )

        return SessionLimitResult(allowed=True)
