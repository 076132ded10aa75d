"""Pytest shared fixtures for synchronizer tests."""
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from apikey_sync.core.apikey import ApikeySynchronizer
from tests.fakes import SERVICE_URL, FakeHttpClient


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from reaching a real Apikey service.

    Tests marked with @pytest.mark.integration skip this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _stub_request(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    monkeypatch.setattr(requests.Session, "request", _stub_request)


# ─────────────────────────────────────────────────────────────────────────────
# Synchronizer
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture
def fake_http():
    return FakeHttpClient()


@pytest.fixture
def synchronizer(fake_http):
    """Synchronizer initialized against the fake transport."""
    sync = ApikeySynchronizer(fake_http)
    sync.init(SERVICE_URL, "manager", "manager-secret")
    return sync


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires running Apikey service)"
    )
    config.addinivalue_line(
        "markers", "critical: marks tests covering the state decision logic"
    )
