"""
WebSocket Router - Relay Endpoint

Thin routing layer; RelayOrchestrator does all session work.
"""
from fastapi import APIRouter, Depends, WebSocket

from relay.api.deps import get_connection_manager, get_session_registry
from relay.services.connection import ConnectionManager
from relay.services.session import RelayOrchestrator, SessionRegistry

router = APIRouter()


@router.websocket("/")
@router.websocket("/ws")
async def ws_endpoint(
    websocket: WebSocket,
    registry: SessionRegistry = Depends(get_session_registry),
    connection_manager: ConnectionManager = Depends(get_connection_manager)
):
    """
    WebSocket endpoint shared by targets and controllers.

    First message (JSON) must register the connection:
        - {"type": "register", "role": "target"}
        - {"type": "register", "role": "controller", "sessionCode": "123456"}

    After registration, every text or binary frame is relayed unchanged
    to the paired peer.
    """
    orchestrator = RelayOrchestrator(
        websocket=websocket,
        registry=registry,
        connection_manager=connection_manager
    )
    await orchestrator.run()
