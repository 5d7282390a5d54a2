import logging
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from relay.schemas import (
    Role,
    RegisterEvent,
    SessionEvent,
    PairedEvent,
    ControllerJoinedEvent,
    ControllerLeftEvent,
    TargetDisconnectedEvent,
    ErrorEvent,
)
from relay.services.connection import ConnectionManager, Frame, RelayConnection, try_send
from relay.services.exceptions import PairingError, ProtocolError, RelayError
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


class RelayOrchestrator:
    """
    Drives one relay WebSocket from accept to teardown.
    Handles:
    - Registration as target (new session) or controller (join by code)
    - Forwarding every later frame to the paired peer
    - Session cleanup on disconnect
    """

    def __init__(
        self,
        websocket: WebSocket,
        registry: SessionRegistry,
        connection_manager: ConnectionManager
    ):
        self.websocket = websocket
        self.registry = registry
        self.connection_manager = connection_manager
        self.connection: Optional[RelayConnection] = None

    async def run(self):
        """
        Main entry point for handling a WebSocket connection.
        """
        await self.websocket.accept()
        self.connection = await self.connection_manager.connect(self.websocket)

        try:
            await self._message_loop()

        except WebSocketDisconnect:
            logger.info(f"[Relay] {self.connection} disconnected")

        except Exception as e:
            logger.error(f"[Relay] Error during message loop for {self.connection}: {e}")

        finally:
            await self._cleanup()

    async def _message_loop(self):
        while True:
            message = await self.websocket.receive()

            if message["type"] == "websocket.disconnect":
                logger.info(f"[Relay] {self.connection} disconnected (code={message.get('code')})")
                return

            frame = Frame.from_message(message)
            if frame is None:
                logger.warning(f"[Relay] Unexpected message structure from {self.connection}")
                continue

            if self.connection.registration is None:
                await self._handle_registration(frame)
            else:
                await self._forward(frame)

    # === Registration ===

    async def _handle_registration(self, frame: Frame):
        try:
            event = self._parse_registration(frame)
            if event.role is Role.TARGET:
                await self._register_target()
            else:
                await self._register_controller(event.session_code)

        except RelayError as e:
            logger.warning(f"[Relay] Registration rejected for {self.connection}: {e.message}")
            await try_send(self.connection, ErrorEvent(message=e.message))

    @staticmethod
    def _parse_registration(frame: Frame) -> RegisterEvent:
        try:
            return RegisterEvent.model_validate_json(frame.payload)
        except ValidationError as e:
            logger.debug(f"[Relay] Invalid registration: {e.errors(include_url=False)}")
            raise ProtocolError()

    async def _register_target(self):
        code = await self.registry.create_session()
        await self.registry.attach_target(code, self.connection)
        self.connection.register(Role.TARGET, code)

        logger.info(f"[Relay] {self.connection} registered as target")
        await try_send(self.connection, SessionEvent(session_code=code))

    async def _register_controller(self, code: str):
        if not await self.registry.attach_controller(code, self.connection):
            raise PairingError()
        self.connection.register(Role.CONTROLLER, code)

        logger.info(f"[Relay] {self.connection} joined session {code}")
        await try_send(self.connection, PairedEvent())

        target = await self.registry.peer_for(code, Role.CONTROLLER, member=self.connection)
        await try_send(target, ControllerJoinedEvent())

    # === Forwarding ===

    async def _forward(self, frame: Frame):
        """Relay one frame to the opposite role. No peer means the frame is dropped."""
        registration = self.connection.registration
        peer = await self.registry.peer_for(
            registration.session_code, registration.role, member=self.connection
        )
        await try_send(peer, frame)

    # === Teardown ===

    async def _cleanup(self):
        """
        Release registry state held by this connection.
        """
        await self.connection_manager.disconnect(self.connection)

        registration = self.connection.registration
        if registration is None:
            return

        code = registration.session_code
        if registration.role is Role.TARGET:
            session = await self.registry.remove(code, target=self.connection)
            if session is not None:
                await try_send(session.controller, TargetDisconnectedEvent())
                logger.info(f"[Relay] Session {code} closed: target left")
        else:
            session = await self.registry.detach_controller(code, self.connection)
            if session is not None:
                await try_send(session.target, ControllerLeftEvent())
                logger.info(f"[Relay] Session {code}: controller left, waiting for a new one")
