"""FastAPI application with the relay WebSocket endpoint."""

import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from . import __version__
from .composition import create_container
from .config import config_path_from_env
from .container import Container
from .infrastructure.web import FastAPIWebSocketAdapter

logger = logging.getLogger(__name__)


def create_app(container: Container | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        container: Pre-wired dependencies. Built from the environment at
            startup when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        if getattr(app.state, "container", None) is None:
            app.state.container = create_container(config_path=config_path_from_env())

        logger.info("shellrelay server started")

        yield

        # Shutdown: drop every remaining SSH connection
        app.state.container.relay_service.close_all()
        logger.info("shellrelay server stopped")

    app = FastAPI(
        title="shellrelay",
        description="Browser terminal relay to remote SSH shells",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        container: Container = app.state.container
        relay = container.relay_service
        return {
            "status": "healthy",
            "connections": relay.connection_count(),
            "sessions": relay.session_count(),
        }

    @app.websocket("/ws")
    async def websocket_relay(websocket: WebSocket):
        """WebSocket endpoint multiplexing terminal sessions."""
        client_host = getattr(websocket.client, "host", None)
        await websocket.accept()

        container: Container = websocket.app.state.container
        connection = FastAPIWebSocketAdapter(websocket)
        logger.info("WebSocket accepted client=%s", client_host)

        try:
            await container.relay_service.serve(connection)
        except WebSocketDisconnect:
            logger.info("Client disconnected client=%s", client_host)
        except Exception:
            logger.exception("WebSocket error client=%s", client_host)
            with suppress(Exception):
                await connection.close(code=1011)
        finally:
            logger.info("WebSocket handler finished client=%s", client_host)

    return app
