"""Command line argument parsing."""

import argparse

from shellrelay import __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace with:
        - config: Path to the YAML config file
        - host: Bind address override
        - port: Port override
        - verbose: Whether to log at DEBUG level
        - no_banner: Whether to skip the startup screen
    """
    parser = argparse.ArgumentParser(
        prog="shellrelay",
        description="shellrelay - browser terminal relay to remote SSH shells",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to config file (default: $SHELLRELAY_CONFIG_PATH or config.yaml)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Address to bind (overrides config)",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Port to listen on (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logs",
    )
    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Skip the startup screen",
    )

    return parser.parse_args(argv)
