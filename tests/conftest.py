"""
Pytest configuration and fixtures for Global Error Handler tests.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from global_error_handler.core.registry import default_registry
from tests.helpers import RecordingAlertSink, build_test_app


@pytest.fixture
def alert_sink():
    """In-memory alert sink recording every alert."""
    return RecordingAlertSink()


@pytest.fixture
def registry():
    """Fresh registry with the default domain mappings."""
    return default_registry()


@pytest.fixture
def app(alert_sink, registry):
    """FastAPI app wired with the error handling middleware."""
    return build_test_app(alert_sink, registry=registry)


@pytest.fixture
def client(app):
    """Sync test client for the test app."""
    with TestClient(app) as test_client:
        yield test_client
