"""
Relay Exceptions

Errors raised while registering a connection. Protocol and pairing errors are
reported back to the offending connection and never close it.
"""
from typing import Optional

from relay.config.constants import PAIRING_ERROR_MESSAGE, PROTOCOL_ERROR_MESSAGE


class RelayError(Exception):
    """Base exception for relay errors"""
    default_message = "Relay error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ProtocolError(RelayError):
    """Raised when a registration message is malformed or unexpected"""
    default_message = PROTOCOL_ERROR_MESSAGE


class PairingError(RelayError):
    """Raised when a controller names an unknown or unreachable session"""
    default_message = PAIRING_ERROR_MESSAGE


class AlreadyRegisteredError(RelayError):
    """Raised when a connection's role is assigned a second time"""
    default_message = "Connection is already registered"
