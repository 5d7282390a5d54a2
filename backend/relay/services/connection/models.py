"""
Connection Models

Data classes representing relay WebSocket connections and the frames that
travel over them.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, Dict, Optional, Union
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from relay.schemas import Role
from relay.services.exceptions import AlreadyRegisteredError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """One opaque WebSocket message. ``str`` payloads are text frames, ``bytes`` are binary."""
    payload: Union[str, bytes]

    @property
    def is_binary(self) -> bool:
        return isinstance(self.payload, bytes)

    @classmethod
    def from_message(cls, message: Dict[str, Any]) -> Optional["Frame"]:
        """Build a frame from an ASGI ``websocket.receive`` message."""
        if message.get("text") is not None:
            return cls(message["text"])
        if message.get("bytes") is not None:
            return cls(message["bytes"])
        return None


@dataclass(frozen=True)
class Registration:
    """Role and session a connection committed to. Immutable once assigned."""
    role: Role
    session_code: str


class RelayConnection:
    """Represents a single peer WebSocket connected to the relay."""

    def __init__(self, websocket: WebSocket, connection_id: Optional[str] = None):
        self.websocket = websocket
        self.connection_id = connection_id or uuid.uuid4().hex[:8]
        self.connected_at = datetime.now(UTC)
        self._registration: Optional[Registration] = None
        self._closed = False

    def __repr__(self) -> str:
        reg = self._registration
        state = f"{reg.role.value}:{reg.session_code}" if reg else "unregistered"
        return f"<RelayConnection {self.connection_id} {state}>"

    # === Registration state ===

    @property
    def registration(self) -> Optional[Registration]:
        return self._registration

    @property
    def role(self) -> Optional[Role]:
        return self._registration.role if self._registration else None

    @property
    def session_code(self) -> Optional[str]:
        return self._registration.session_code if self._registration else None

    def register(self, role: Role, session_code: str) -> Registration:
        """Commit this connection to a role and session. Allowed exactly once."""
        if self._registration is not None:
            raise AlreadyRegisteredError(
                f"Connection {self.connection_id} already registered as {self._registration.role.value}"
            )
        self._registration = Registration(role=role, session_code=session_code)
        return self._registration

    # === Liveness ===

    @property
    def is_open(self) -> bool:
        if self._closed:
            return False
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    def mark_closed(self) -> None:
        self._closed = True

    # === Sending ===

    async def send_json(self, data: Dict[str, Any]) -> bool:
        """Send JSON message to this connection."""
        try:
            await self.websocket.send_json(data)
            return True
        except Exception as e:
            logger.error(f"Error sending JSON to {self.connection_id}: {e}")
            return False

    async def send_frame(self, frame: Frame) -> bool:
        """Send an opaque frame, keeping its text/binary encoding."""
        try:
            if frame.is_binary:
                await self.websocket.send_bytes(frame.payload)
            else:
                await self.websocket.send_text(frame.payload)
            return True
        except Exception as e:
            logger.error(f"Error sending frame to {self.connection_id}: {e}")
            return False
