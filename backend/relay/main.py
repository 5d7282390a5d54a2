"""
Remote Control Relay - Main Application

Entry point for the FastAPI application. It serves:
- The relay WebSocket endpoint (targets and controllers)
- A health endpoint reporting live sessions and connections
"""
from contextlib import asynccontextmanager
import logging
from datetime import datetime, UTC

from fastapi import Depends, FastAPI

from relay import __version__
from relay.api.deps import get_http_connection_manager, get_http_session_registry
from relay.api.websocket import router as ws_router
from relay.config.settings import settings
from relay.schemas import Role
from relay.services.connection import ConnectionManager
from relay.services.session import SessionRegistry

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    """
    # === STARTUP ===
    logger.info(f"Relay server listening on port {settings.PORT}")
    logger.info(f"Target and controller connect to: ws://<this-server-ip>:{settings.PORT}")

    yield  # Application runs here

    # === SHUTDOWN ===
    registry: SessionRegistry = app.state.session_registry
    logger.info(f"Shutting down with {len(registry)} live session(s): {registry.codes()}")


app = FastAPI(
    title="Remote Control Relay",
    description="Pairs a target and a controller by session code and relays their messages",
    version=__version__,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.state.session_registry = SessionRegistry()
app.state.connection_manager = ConnectionManager()

# Include WebSocket routes
app.include_router(ws_router)


@app.get("/health")
async def health(
    registry: SessionRegistry = Depends(get_http_session_registry),
    connection_manager: ConnectionManager = Depends(get_http_connection_manager)
):
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "active_sessions": len(registry),
        "paired_sessions": registry.paired_count(),
        "total_connections": connection_manager.get_total_connections(),
        "targets": len(connection_manager.get_connections(Role.TARGET)),
        "controllers": len(connection_manager.get_connections(Role.CONTROLLER))
    }
