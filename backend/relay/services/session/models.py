"""
Session Models

A session is one target/controller pairing, keyed by its 6-digit code.
"""
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Optional, TYPE_CHECKING

from relay.schemas import Role

if TYPE_CHECKING:
    from relay.services.protocols import PeerConnection


@dataclass
class Session:
    code: str
    target: Optional["PeerConnection"] = None
    controller: Optional["PeerConnection"] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_paired(self) -> bool:
        return self.controller is not None

    def member(self, role: Role) -> Optional["PeerConnection"]:
        """The connection holding ``role`` in this session."""
        if role is Role.TARGET:
            return self.target
        return self.controller

    def peer_of(self, role: Role) -> Optional["PeerConnection"]:
        """The connection on the other side of ``role``."""
        if role is Role.TARGET:
            return self.controller
        return self.target
