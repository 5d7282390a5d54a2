"""Pydantic schemas for the relay's control-plane messages."""
from .websocket_events import (
    Role,
    RegisterEvent,
    SessionEvent,
    PairedEvent,
    ControllerJoinedEvent,
    ControllerLeftEvent,
    TargetDisconnectedEvent,
    ErrorEvent,
    Notification,
)

__all__ = [
    "Role",
    "RegisterEvent",
    "SessionEvent",
    "PairedEvent",
    "ControllerJoinedEvent",
    "ControllerLeftEvent",
    "TargetDisconnectedEvent",
    "ErrorEvent",
    "Notification",
]
