"""
Test configuration for the media gateway tests.

Ensures the project root is on sys.path so the package imports without an
install, and provides shared fixtures for the HTTP surface.
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mediagate import config  # noqa: E402
from mediagate.tests.helpers import make_image  # noqa: E402


@pytest.fixture(autouse=True)
def staging(monkeypatch):
    """Run every test in staging unless it switches to production itself."""
    monkeypatch.setattr(config, "ENVIRONMENT", "staging")
    monkeypatch.setattr(config, "REQUEST_LOGGING_ENABLED", False)


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setattr(config, "ENVIRONMENT", "production")


@pytest.fixture(scope="module")
def client():
    from fastapi.testclient import TestClient

    from mediagate.server import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_bytes() -> bytes:
    return make_image()


@pytest.fixture
def log_messages():
    """Collect loguru records emitted while the test runs."""
    from loguru import logger

    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
