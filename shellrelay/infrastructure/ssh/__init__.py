"""SSH infrastructure - remote shell adapter."""

from .asyncssh_shell import (
    AdapterState,
    AsyncSSHShell,
    SSHOptions,
    classify_exception,
    create_shell_factory,
)

__all__ = [
    "AsyncSSHShell",
    "AdapterState",
    "SSHOptions",
    "classify_exception",
    "create_shell_factory",
]
