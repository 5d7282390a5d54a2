import sys
import pytest
from pathlib import Path

# Add project root (1 level up from tests/) to sys.path so tests can import 'relay'
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))


from fastapi.testclient import TestClient

from relay.api import deps
from relay.main import app
from relay.services.connection import ConnectionManager
from relay.services.session import SessionRegistry


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def connection_manager():
    return ConnectionManager()


@pytest.fixture
def client(registry, connection_manager):
    """TestClient bound to a fresh registry and connection table.

    Used as a context manager so every WebSocket shares the same event loop.
    """
    app.dependency_overrides[deps.get_session_registry] = lambda: registry
    app.dependency_overrides[deps.get_http_session_registry] = lambda: registry
    app.dependency_overrides[deps.get_connection_manager] = lambda: connection_manager
    app.dependency_overrides[deps.get_http_connection_manager] = lambda: connection_manager
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
