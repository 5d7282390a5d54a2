"""
Connection Manager

Tracks every WebSocket currently attached to the relay, registered or not.
Pairing state lives in the session registry; this table only answers
"who is connected" for health reporting.
"""
import asyncio
from datetime import datetime, UTC
from typing import Dict, List, Optional
import logging

from fastapi import WebSocket

from relay.schemas import Role
from .models import RelayConnection

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages all open relay connections."""

    def __init__(self):
        # connection_id -> RelayConnection
        self._connections: Dict[str, RelayConnection] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> RelayConnection:
        """Track a newly accepted WebSocket."""
        conn = RelayConnection(websocket)
        async with self._lock:
            self._connections[conn.connection_id] = conn

        logger.info(f"Connection {conn.connection_id} opened")
        return conn

    async def disconnect(self, conn: RelayConnection) -> None:
        """Stop tracking a connection and mark it closed."""
        conn.mark_closed()
        async with self._lock:
            self._connections.pop(conn.connection_id, None)

        duration = (datetime.now(UTC) - conn.connected_at).total_seconds()
        logger.info(f"Connection {conn.connection_id} closed after {duration:.1f}s")

    # === Query Methods ===

    def get_connections(self, role: Optional[Role] = None) -> List[RelayConnection]:
        """List open connections, optionally only those registered with ``role``."""
        conns = list(self._connections.values())
        if role is None:
            return conns
        return [c for c in conns if c.role is role]

    def get_total_connections(self) -> int:
        return len(self._connections)
