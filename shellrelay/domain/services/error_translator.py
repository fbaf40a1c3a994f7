"""Translate raw shell failures into user-facing messages."""

from dataclasses import dataclass

from ..values import Credentials, ErrorCategory, FailureStage, ShellFailure

# Machine codes an adapter may attach to a failure
AUTH_CODES = frozenset({"AUTH", "EACCES"})
REFUSED_CODES = frozenset({"ECONNREFUSED"})
NOT_FOUND_CODES = frozenset({"ENOTFOUND", "EAI_NONAME", "EAI_AGAIN"})
UNREACHABLE_CODES = frozenset({"EHOSTUNREACH", "ENETUNREACH", "EHOSTDOWN"})
TIMEOUT_CODES = frozenset({"ETIMEDOUT", "TIMEOUT"})


@dataclass(frozen=True, slots=True)
class TranslatedError:
    """A categorized failure plus the message shown to the user."""

    category: ErrorCategory
    message: str


def categorize(failure: ShellFailure) -> ErrorCategory:
    """Pick the category for a raw failure.

    Machine codes win; the message text is matched as a fallback so
    errors from libraries that only carry text still classify.
    """
    code = (failure.code or "").upper()
    text = failure.message.lower()

    if code in AUTH_CODES or "authentication" in text or "permission denied" in text:
        return ErrorCategory.AUTHENTICATION_FAILED
    if failure.stage is FailureStage.SHELL:
        return ErrorCategory.SHELL_ERROR
    if code in REFUSED_CODES or "econnrefused" in text or "connection refused" in text:
        return ErrorCategory.CONNECTION_REFUSED
    if code in TIMEOUT_CODES or "timed out" in text or "timeout" in text:
        return ErrorCategory.TIMED_OUT
    if (
        code in NOT_FOUND_CODES
        or code in UNREACHABLE_CODES
        or "enotfound" in text
        or "not known" in text
        or "unreachable" in text
        or "no route" in text
    ):
        return ErrorCategory.HOST_UNREACHABLE
    return ErrorCategory.UNKNOWN


def _is_not_found(failure: ShellFailure) -> bool:
    code = (failure.code or "").upper()
    text = failure.message.lower()
    return code in NOT_FOUND_CODES or "enotfound" in text or "not known" in text


def translate_failure(failure: ShellFailure, credentials: Credentials) -> TranslatedError:
    """Map (raw failure, credentials) to a category and display message."""
    category = categorize(failure)
    host, port = credentials.host, credentials.port

    if category is ErrorCategory.AUTHENTICATION_FAILED:
        message = "Authentication failed. Check your credentials."
    elif category is ErrorCategory.CONNECTION_REFUSED:
        message = f"Connection refused by {host}:{port}."
    elif category is ErrorCategory.TIMED_OUT:
        message = f"Connection to {host} timed out."
    elif category is ErrorCategory.HOST_UNREACHABLE:
        message = f"Host not found: {host}" if _is_not_found(failure) else f"Host unreachable: {host}"
    elif category is ErrorCategory.SHELL_ERROR:
        message = f"Shell error: {failure.message}"
    else:
        message = failure.message or "Connection failed."

    return TranslatedError(category=category, message=message)
