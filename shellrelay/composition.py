"""Composition root - the ONLY place where dependencies are wired."""

from pathlib import Path

from shellrelay.application.services import RelayService
from shellrelay.config import Config, load_config
from shellrelay.container import Container
from shellrelay.domain import (
    RemoteShellFactory,
    SessionLimitChecker,
    SessionLimitConfig,
    TerminalDimensions,
)
from shellrelay.infrastructure.ssh import SSHOptions, create_shell_factory


def create_container(
    config_path: Path | str = "config.yaml",
    config: Config | None = None,
    shell_factory: RemoteShellFactory | None = None,
) -> Container:
    """Create the dependency container with all wired dependencies.

    Args:
        config_path: Path to config file, used when ``config`` is not given.
        config: Already loaded configuration.
        shell_factory: Override for the remote shell factory (tests).

    Returns:
        Fully wired dependency container.
    """
    if config is None:
        config = load_config(config_path)

    if shell_factory is None:
        shell_factory = create_shell_factory(
            SSHOptions(
                connect_timeout=config.ssh.connect_timeout,
                keepalive_interval=config.ssh.keepalive_interval,
                keepalive_count_max=config.ssh.keepalive_count_max,
                term_type=config.terminal.term_type,
                known_hosts=config.ssh.known_hosts,
            )
        )

    limit_checker = SessionLimitChecker(
        SessionLimitConfig(
            max_per_connection=config.limits.max_sessions_per_connection,
            max_total=config.limits.max_total_sessions,
        )
    )

    relay_service = RelayService(
        shell_factory=shell_factory,
        limit_checker=limit_checker,
        default_dimensions=TerminalDimensions(config.terminal.cols, config.terminal.rows),
        heartbeat_interval=config.server.heartbeat_interval,
        max_input_size=config.limits.max_input_size,
    )

    return Container(
        relay_service=relay_service,
        shell_factory=shell_factory,
        config=config,
    )
