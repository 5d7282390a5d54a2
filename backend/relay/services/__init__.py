"""Relay services.

- Connection: wrappers around accepted WebSockets, the send-if-open helper
  and the table of open connections
- Session: the session registry and the per-connection relay orchestrator
"""
