"""Dependency container - holds all wired dependencies."""

from dataclasses import dataclass

from shellrelay.application.services import RelayService
from shellrelay.config import Config
from shellrelay.domain import RemoteShellFactory


@dataclass(frozen=True)
class Container:
    """Immutable dependency container.

    All dependencies are wired at startup and cannot be modified.
    """

    # Services
    relay_service: RelayService

    # Factories
    shell_factory: RemoteShellFactory

    # Configuration
    config: Config

    @property
    def server_host(self) -> str:
        return self.config.server.host

    @property
    def server_port(self) -> int:
        return self.config.server.port
