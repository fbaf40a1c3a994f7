"""Domain services - pure business logic operations."""

from .error_translator import TranslatedError, categorize, translate_failure
from .session_limits import SessionLimitChecker, SessionLimitConfig, SessionLimitResult

__all__ = [
    "translate_failure",
    "categorize",
    "TranslatedError",
    "SessionLimitChecker",
    "SessionLimitConfig",
    "SessionLimitResult",
]
