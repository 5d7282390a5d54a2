"""
Connection Management Module

Connection wrappers, the send-if-open helper and the open-connection table.
"""
from .models import Frame, Registration, RelayConnection
from .manager import ConnectionManager
from .notifications import try_send

__all__ = [
    "Frame",
    "Registration",
    "RelayConnection",
    "ConnectionManager",
    "try_send",
]
