"""
Relay protocol constants.

Environment-dependent settings (host, port, log level) belong in settings.py.
This file holds the values that define the wire protocol itself.
"""

# ==============================================================================
# SESSION CODES
# ==============================================================================

# Inclusive bounds of the 6-digit session code space
SESSION_CODE_MIN: int = 100000
SESSION_CODE_MAX: int = 999999

# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

# Sent when the first message is not a valid registration
PROTOCOL_ERROR_MESSAGE: str = "Send register first"

# Sent when a controller names a session that is unknown or has no live target
PAIRING_ERROR_MESSAGE: str = "Invalid or expired code"
