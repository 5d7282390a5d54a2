"""
WebSocket Event Schemas

Pydantic models for the relay's control plane. Inbound registration is the
only message the relay ever interprets; everything after it is opaque.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Role(str, Enum):
    TARGET = "target"
    CONTROLLER = "controller"


# =============================================================================
# Client -> Server
# =============================================================================

class RegisterEvent(BaseModel):
    """
    First message on every connection.

    A controller must name the session it wants to join; a target must not
    (any code it sends is ignored, the relay always issues a fresh one).
    """
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["register"]
    role: Role
    # Only checked for controllers; a target's value is discarded.
    session_code: Optional[Any] = Field(None, alias="sessionCode")

    @model_validator(mode="after")
    def _controller_needs_code(self) -> "RegisterEvent":
        if self.role is Role.TARGET:
            self.session_code = None
        elif not isinstance(self.session_code, str) or not self.session_code:
            raise ValueError("controller registration requires a sessionCode string")
        return self


# =============================================================================
# Server -> Client
# =============================================================================

class NotificationBase(BaseModel):
    """Base model for all relay notifications."""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class SessionEvent(NotificationBase):
    """Sent to a target once its session exists."""
    type: Literal["session"] = "session"
    session_code: str = Field(alias="sessionCode")


class PairedEvent(NotificationBase):
    """Sent to a controller after a successful join."""
    type: Literal["paired"] = "paired"


class ControllerJoinedEvent(NotificationBase):
    type: Literal["controller_joined"] = "controller_joined"


class ControllerLeftEvent(NotificationBase):
    type: Literal["controller_left"] = "controller_left"


class TargetDisconnectedEvent(NotificationBase):
    type: Literal["target_disconnected"] = "target_disconnected"


class ErrorEvent(NotificationBase):
    type: Literal["error"] = "error"
    message: str


Notification = Annotated[
    Union[
        SessionEvent,
        PairedEvent,
        ControllerJoinedEvent,
        ControllerLeftEvent,
        TargetDisconnectedEvent,
        ErrorEvent,
    ],
    Field(discriminator="type"),
]
