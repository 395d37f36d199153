from __future__ import annotations

import os

import httpx
import pytest
from dotenv import load_dotenv

from test.settings import TEST_ROOT, test_settings

# Local overrides first, then the checked-in defaults; real env vars always win
load_dotenv(TEST_ROOT / ".env", override=False)
load_dotenv(TEST_ROOT / ".env.example", override=False)

# Application settings are read once at import; point them at the test doubles first
for _key, _value in test_settings.export_app_env().items():
    os.environ[_key] = _value


@pytest.fixture(scope="session")
def test_config():
    """Test configuration loaded from ``test/.env`` and the environment."""
    return test_settings


@pytest.fixture(autouse=True)
def _offline_network_guard(monkeypatch: pytest.MonkeyPatch):
    """Fail any test that lets httpx open a real network connection.

    API tests talk to the app through ``httpx.ASGITransport``, which never
    reaches the network transports patched here.
    """

    def _blocked(request: httpx.Request) -> None:
        raise RuntimeError(f"Network access blocked in tests: {request.method} {request.url}")

    def blocked_sync(self, request: httpx.Request) -> httpx.Response:
        _blocked(request)

    async def blocked_async(self, request: httpx.Request) -> httpx.Response:
        _blocked(request)

    monkeypatch.setattr(httpx.HTTPTransport, "handle_request", blocked_sync)
    monkeypatch.setattr(httpx.AsyncHTTPTransport, "handle_async_request", blocked_async)
