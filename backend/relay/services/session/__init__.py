"""
Session management module.

Provides the SessionRegistry and the per-connection RelayOrchestrator.
"""
from .models import Session
from .registry import SessionRegistry
from .orchestrator import RelayOrchestrator

__all__ = ["Session", "SessionRegistry", "RelayOrchestrator"]
