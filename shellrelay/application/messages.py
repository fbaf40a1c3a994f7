"""Wire messages exchanged with the browser client.

Inbound payloads are validated with Pydantic; outbound messages are
plain dicts built by the helpers at the bottom of this module.
"""

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from shellrelay.domain import Credentials, SessionId, TerminalDimensions

# Inbound message types
SESSION_CREATE = "session:create"
SESSION_INPUT = "session:input"
SESSION_RESIZE = "session:resize"
SESSION_DISCONNECT = "session:disconnect"

# Outbound message types
SESSION_CONNECTED = "session:connected"
SESSION_DATA = "session:data"
SESSION_ERROR = "session:error"
SESSION_CLOSED = "session:closed"

# Transport liveness
PING = "ping"
PONG = "pong"


class _Inbound(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    session_id: str = Field(alias="sessionId", min_length=1)


class CredentialsPayload(BaseModel):
    """Connection settings sent by the client with ``session:create``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    host: str = Field(min_length=1)
    port: int = Field(default=22, ge=1, le=65535)
    username: str = Field(min_length=1)
    auth_method: Literal["password", "privateKey"] | None = Field(
        default=None, alias="authMethod"
    )
    password: str | None = None
    private_key: str | None = Field(default=None, alias="privateKey")
    passphrase: str | None = None
    cols: int | None = Field(default=None, gt=0)
    rows: int | None = Field(default=None, gt=0)

    def to_credentials(self, default_dimensions: TerminalDimensions) -> Credentials:
        """Build domain credentials.

        The key is used when ``authMethod`` asks for it (or is absent and a
        key was sent); otherwise the password is used.

        Raises:
            ValueError: If no usable secret was supplied.
        """
        use_key = bool(self.private_key) and self.auth_method in (None, "privateKey")
        dimensions = TerminalDimensions.clamped(
            self.cols or default_dimensions.cols,
            self.rows or default_dimensions.rows,
        )
        return Credentials(
            host=self.host.strip(),
            port=self.port,
            username=self.username,
            password=None if use_key else self.password,
            private_key=self.private_key if use_key else None,
            passphrase=(self.passphrase or None) if use_key else None,
            dimensions=dimensions,
        )


class CreateSessionMessage(_Inbound):
    type: Literal["session:create"] = SESSION_CREATE
    credentials: CredentialsPayload = Field(
        validation_alias=AliasChoices("credentials", "config")
    )


class InputMessage(_Inbound):
    type: Literal["session:input"] = SESSION_INPUT
    data: str


class ResizeMessage(_Inbound):
    type: Literal["session:resize"] = SESSION_RESIZE
    cols: int = Field(gt=0)
    rows: int = Field(gt=0)


class DisconnectMessage(_Inbound):
    type: Literal["session:disconnect"] = SESSION_DISCONNECT


def connected_message(session_id: SessionId) -> dict[str, Any]:
    return {"type": SESSION_CONNECTED, "sessionId": str(session_id)}


def data_message(session_id: SessionId, data: str) -> dict[str, Any]:
    return {"type": SESSION_DATA, "sessionId": str(session_id), "data": data}


def error_message(session_id: SessionId | str, message: str) -> dict[str, Any]:
    return {"type": SESSION_ERROR, "sessionId": str(session_id), "message": message}


def closed_message(session_id: SessionId) -> dict[str, Any]:
    return {"type": SESSION_CLOSED, "sessionId": str(session_id)}
