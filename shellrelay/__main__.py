"""Entry point: ``python -m shellrelay`` or the ``shellrelay`` script."""

import logging

import uvicorn

from shellrelay.app import create_app
from shellrelay.cli import display_startup_screen, parse_args
from shellrelay.composition import create_container
from shellrelay.config import config_path_from_env, load_config
from shellrelay.logging_setup import setup_logging, setup_logging_from_env

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.verbose:
        setup_logging("DEBUG")
    else:
        setup_logging_from_env()

    config_path = args.config or config_path_from_env()
    config = load_config(config_path)

    # CLI overrides win over the config file
    server = config.server.model_copy(
        update={
            key: value
            for key, value in (("host", args.host), ("port", args.port))
            if value is not None
        }
    )
    config = config.model_copy(update={"server": server})

    container = create_container(config=config)
    app = create_app(container)

    if not args.no_banner:
        display_startup_screen(server.host, server.port, config_path)

    uvicorn.run(
        app,
        host=server.host,
        port=server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
