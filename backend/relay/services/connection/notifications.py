"""
Connection Notifications

The single send path used by the relay for anything addressed to a peer:
control-plane notifications and forwarded frames alike. A peer that is
missing or no longer open is skipped without error.
"""
from typing import Optional, Union, TYPE_CHECKING
import logging

from relay.schemas.websocket_events import Notification, NotificationBase
from .models import Frame

if TYPE_CHECKING:
    from relay.services.protocols import PeerConnection

logger = logging.getLogger(__name__)


async def try_send(
    connection: Optional["PeerConnection"],
    message: Union[Frame, Notification]
) -> bool:
    """
    Deliver a notification or frame if the connection is open.

    Args:
        connection: Destination peer, or None when no peer is attached
        message: Notification model or opaque frame

    Returns:
        True if the message was handed to the transport
    """
    if connection is None or not connection.is_open:
        logger.debug(f"Dropping {_describe(message)}: peer not open")
        return False

    if isinstance(message, Frame):
        return await connection.send_frame(message)
    return await connection.send_json(message.to_wire())


def _describe(message: Union[Frame, NotificationBase]) -> str:
    if isinstance(message, Frame):
        kind = "binary" if message.is_binary else "text"
        return f"{kind} frame ({len(message.payload)})"
    return f"'{message.type}' notification"
