"""Identifier value objects."""

import uuid
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionId:
    """Client-supplied session identifier, unique within one connection."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("SessionId cannot be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ConnectionId:
    """Opaque identifier of one client transport connection."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("ConnectionId cannot be empty")

    @classmethod
    def generate(cls) -> "ConnectionId":
        return cls(uuid.uuid4().hex)

    def __str__(self) -> str:
        return self.value
