"""Raw failure reported by a remote shell adapter."""

from dataclasses import dataclass
from enum import Enum


class FailureStage(str, Enum):
    """Where in the adapter lifecycle a failure happened."""

    CONNECT = "connect"
    SHELL = "shell"
    STREAM = "stream"


@dataclass(frozen=True, slots=True)
class ShellFailure:
    """Low-level failure, before translation into a user-facing message.

    ``code`` is a short machine code such as ``ECONNREFUSED`` or ``AUTH``
    when the adapter could classify the cause, otherwise ``None``.
    """

    message: str
    stage: FailureStage = FailureStage.CONNECT
    code: str | None = None
