"""Remote control relay: pairs a target and a controller over WebSockets."""

__version__ = "1.0.0"
