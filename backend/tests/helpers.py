import asyncio
import json
from typing import Any, Dict, List, Optional, Tuple, Union

from starlette.websockets import WebSocketState

from relay.services.connection import ConnectionManager
from relay.services.session import RelayOrchestrator, SessionRegistry


class ScriptedRandom:
    """Random source whose randint returns a fixed sequence of values."""

    def __init__(self, values: List[int]):
        self._values = list(values)

    def randint(self, a: int, b: int) -> int:
        return self._values.pop(0)


class FakePeer:
    """Minimal stand-in for a connection, as seen by the registry."""

    def __init__(self, name: str = "peer", is_open: bool = True):
        self.name = name
        self.is_open = is_open

    def __repr__(self):
        return f"<FakePeer {self.name}>"


class FakeWebSocket:
    """In-memory WebSocket driven from the test side.

    The relay sees the server half (accept/receive/send_*); the test uses the
    client_* helpers to inject frames and next_sent() to read what the relay
    sent back.
    """

    def __init__(self):
        self.client_state = WebSocketState.CONNECTING
        self.application_state = WebSocketState.CONNECTING
        self._inbox: asyncio.Queue = asyncio.Queue()
        self._outbox: asyncio.Queue = asyncio.Queue()

    # --- server half ---

    async def accept(self):
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def receive(self) -> Dict[str, Any]:
        message = await self._inbox.get()
        if message["type"] == "websocket.disconnect":
            self.client_state = WebSocketState.DISCONNECTED
        return message

    async def send_json(self, data: Dict[str, Any]):
        self._check_open()
        self._outbox.put_nowait(("json", data))

    async def send_text(self, data: str):
        self._check_open()
        self._outbox.put_nowait(("text", data))

    async def send_bytes(self, data: bytes):
        self._check_open()
        self._outbox.put_nowait(("bytes", data))

    def _check_open(self):
        if self.client_state != WebSocketState.CONNECTED:
            raise RuntimeError("Cannot send on a closed websocket")

    # --- client half ---

    def client_send_json(self, data: Dict[str, Any]):
        self.client_send_text(json.dumps(data))

    def client_send_text(self, data: str):
        self._inbox.put_nowait({"type": "websocket.receive", "text": data})

    def client_send_bytes(self, data: bytes):
        self._inbox.put_nowait({"type": "websocket.receive", "bytes": data})

    def client_close(self, code: int = 1000):
        self._inbox.put_nowait({"type": "websocket.disconnect", "code": code})

    async def next_sent(self, timeout: float = 1.0) -> Tuple[str, Union[str, bytes, Dict[str, Any]]]:
        return await asyncio.wait_for(self._outbox.get(), timeout)

    async def next_json(self, timeout: float = 1.0) -> Dict[str, Any]:
        kind, payload = await self.next_sent(timeout)
        assert kind == "json", f"expected a JSON notification, got {kind}: {payload!r}"
        return payload

    def drain(self) -> List[Tuple[str, Any]]:
        """Everything sent so far and not yet read."""
        items = []
        while not self._outbox.empty():
            items.append(self._outbox.get_nowait())
        return items


class RelayPeer:
    """A FakeWebSocket with its orchestrator running as a task."""

    def __init__(self, registry: SessionRegistry, connection_manager: ConnectionManager):
        self.ws = FakeWebSocket()
        self.orchestrator = RelayOrchestrator(self.ws, registry, connection_manager)
        self.task: Optional[asyncio.Task] = None

    async def start(self) -> "RelayPeer":
        self.task = asyncio.create_task(self.orchestrator.run())
        await settle()
        return self

    async def close(self):
        self.ws.client_close()
        await asyncio.wait_for(self.task, 1.0)

    @property
    def connection(self):
        return self.orchestrator.connection


async def settle(delay: float = 0.01):
    """Let every running relay task process what is queued."""
    await asyncio.sleep(delay)


async def register_target(peer: RelayPeer) -> str:
    peer.ws.client_send_json({"type": "register", "role": "target"})
    message = await peer.ws.next_json()
    assert message["type"] == "session"
    return message["sessionCode"]


async def register_controller(peer: RelayPeer, code: str) -> Dict[str, Any]:
    peer.ws.client_send_json({"type": "register", "role": "controller", "sessionCode": code})
    return await peer.ws.next_json()
