"""User-facing error categories."""

from enum import Enum


class ErrorCategory(str, Enum):
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    CONNECTION_REFUSED = "ConnectionRefused"
    HOST_UNREACHABLE = "HostUnreachable"
    TIMED_OUT = "TimedOut"
    SHELL_ERROR = "ShellError"
    UNKNOWN = "Unknown"
