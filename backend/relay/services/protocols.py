"""
Protocol definitions for relay peers.

The session registry only needs to know whether a peer is still open; the
orchestrator additionally sends notifications and frames to it. Keeping this
as a Protocol lets the registry be exercised with plain test doubles.
"""

from typing import Any, Dict, Protocol


class PeerConnection(Protocol):
    """Interface of one live peer as seen by the session layer."""

    @property
    def is_open(self) -> bool:
        """True while frames can still be delivered to the peer."""
        ...

    async def send_json(self, data: Dict[str, Any]) -> bool:
        ...

    async def send_frame(self, frame: Any) -> bool:
        ...
