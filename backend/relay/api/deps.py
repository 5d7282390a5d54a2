from fastapi import WebSocket, Request

from relay.services.connection import ConnectionManager
from relay.services.session import SessionRegistry


def get_session_registry(websocket: WebSocket) -> SessionRegistry:
    """
    Dependency returning the application's session registry.
    """
    return websocket.app.state.session_registry


def get_connection_manager(websocket: WebSocket) -> ConnectionManager:
    return websocket.app.state.connection_manager


def get_http_session_registry(request: Request) -> SessionRegistry:
    """Same registry, for plain HTTP routes such as /health."""
    return request.app.state.session_registry


def get_http_connection_manager(request: Request) -> ConnectionManager:
    return request.app.state.connection_manager
