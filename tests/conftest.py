"""Test configuration for oktaflow tests."""

import httpx
import pytest


@pytest.fixture
def http():
    """Shared httpx.Client; tests patch its request methods."""
    client = httpx.Client()
    yield client
    client.close()


@pytest.fixture
def sleeps():
    """Records every sleep the verify loop asks for instead of sleeping."""
    return []


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("OKTA_DOMAIN", "OKTA_USERNAME", "OKTA_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
