"""
Session Registry

In-memory store of live sessions. It is the only owner of Session lifetime
and the only place session codes are issued. Every operation runs under the
registry's lock, so concurrent registrations can never collide on a code and
a detach/remove cannot interleave with a lookup.
"""
import asyncio
from datetime import datetime, UTC
import random
from typing import Dict, List, Optional, TYPE_CHECKING
import logging

from relay.config.constants import SESSION_CODE_MAX, SESSION_CODE_MIN
from relay.schemas import Role
from relay.services.exceptions import RelayError
from .models import Session

if TYPE_CHECKING:
    from relay.services.protocols import PeerConnection

logger = logging.getLogger(__name__)

CODE_SPACE_SIZE = SESSION_CODE_MAX - SESSION_CODE_MIN + 1


class SessionRegistry:
    """
    Maps session codes to sessions.

    Args:
        rng: Random source for code generation. Defaults to the OS entropy
             source; tests inject a seeded or scripted one.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._sessions: Dict[str, Session] = {}
        self._lock = asyncio.Lock()
        self._rng = rng or random.SystemRandom()

    # === Lifecycle ===

    async def create_session(self) -> str:
        """Issue a fresh code and insert an empty session under it."""
        async with self._lock:
            code = self._generate_code()
            self._sessions[code] = Session(code=code)

        logger.info(f"[Registry] Session {code} created")
        return code

    async def attach_target(self, code: str, target: "PeerConnection") -> None:
        async with self._lock:
            session = self._sessions.get(code)
            if session is None:
                raise RelayError(f"Session {code} does not exist")
            session.target = target

    async def lookup(self, code: str) -> Optional[Session]:
        async with self._lock:
            return self._sessions.get(code)

    async def attach_controller(self, code: str, controller: "PeerConnection") -> bool:
        """
        Join a controller to a session.

        Succeeds only if the session exists and its target is still open.
        A failed join leaves the registry untouched.
        """
        async with self._lock:
            session = self._sessions.get(code)
            if session is None or session.target is None or not session.target.is_open:
                return False

            if session.controller is not None and session.controller is not controller:
                logger.info(f"[Registry] Session {code}: replacing previous controller")
            session.controller = controller

        logger.info(f"[Registry] Session {code} paired")
        return True

    async def detach_controller(self, code: str, controller: Optional["PeerConnection"] = None) -> Optional[Session]:
        """
        Clear the session's controller. Idempotent.

        When ``controller`` is given, only that exact connection is detached,
        so a controller that was already replaced cannot unpair its successor.

        Returns:
            The session if a controller reference was cleared, else None
        """
        async with self._lock:
            session = self._sessions.get(code)
            if session is None or session.controller is None:
                return None
            if controller is not None and session.controller is not controller:
                return None
            session.controller = None

        logger.info(f"[Registry] Session {code} unpaired")
        return session

    async def remove(self, code: str, target: Optional["PeerConnection"] = None) -> Optional[Session]:
        """
        Delete a session. Idempotent.

        When ``target`` is given, the session is only removed if it is still
        owned by that connection.

        Returns:
            The removed session, or None if nothing was removed
        """
        async with self._lock:
            session = self._sessions.get(code)
            if session is None:
                return None
            if target is not None and session.target is not target:
                return None
            del self._sessions[code]

        lifetime = (datetime.now(UTC) - session.created_at).total_seconds()
        logger.info(f"[Registry] Session {code} removed after {lifetime:.1f}s")
        return session

    async def peer_for(
        self,
        code: str,
        role: Role,
        member: Optional["PeerConnection"] = None
    ) -> Optional["PeerConnection"]:
        """
        The connection opposite ``role`` in session ``code``, if any.

        When ``member`` is given, a peer is only returned while ``member``
        still holds ``role`` in that session.
        """
        async with self._lock:
            session = self._sessions.get(code)
            if session is None:
                return None
            if member is not None and session.member(role) is not member:
                return None
            return session.peer_of(role)

    # === Query Methods ===

    def codes(self) -> List[str]:
        return list(self._sessions.keys())

    def paired_count(self) -> int:
        return sum(1 for s in self._sessions.values() if s.is_paired)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, code: str) -> bool:
        return code in self._sessions

    # === Internals ===

    def _generate_code(self) -> str:
        # Caller holds the lock.
        if len(self._sessions) >= CODE_SPACE_SIZE:
            raise RelayError("No free session codes")

        while True:
            code = str(self._rng.randint(SESSION_CODE_MIN, SESSION_CODE_MAX))
            if code not in self._sessions:
                return code
