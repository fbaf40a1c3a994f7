"""ASGI application factory for uvicorn.

Usage:
    uvicorn shellrelay.asgi:create_app_from_env --factory
"""

from shellrelay.app import create_app
from shellrelay.composition import create_container
from shellrelay.config import config_path_from_env
from shellrelay.logging_setup import setup_logging_from_env


def create_app_from_env():
    """Create FastAPI app from environment variables.

    Environment variables:
        SHELLRELAY_CONFIG_PATH: Path to config file (default: config.yaml)
        SHELLRELAY_LOG_LEVEL: Log level (default: INFO)
    """
    setup_logging_from_env()
    container = create_container(config_path=config_path_from_env())
    return create_app(container)
