"""Logging configuration."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "SHELLRELAY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("asyncssh",)


def setup_logging(level: str | int = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging with a rich console handler."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def setup_logging_from_env() -> None:
    """Configure logging from SHELLRELAY_LOG_LEVEL."""
    setup_logging(os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL))
