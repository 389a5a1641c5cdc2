"""Shared fixtures: an in-memory Infisical API behind httpx.MockTransport."""

import json
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from infisical_mcp.auth import LOGIN_PATH, CredentialProvider
from infisical_mcp.client import InfisicalClient
from infisical_mcp.config import Settings
from infisical_mcp.mcp.dispatcher import McpDispatcher

HOST = "https://infisical.test"


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeInfisical:
    """Routes requests by (method, path) and records everything it receives.

    A route is either a ``(status, body)`` tuple or a callable taking the
    request and returning an ``httpx.Response``. Logins hand out
    ``tok-1``, ``tok-2``, ... valid for an hour.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.logins = 0
        self.routes: dict[tuple[str, str], object] = {}

    def route(self, method: str, path: str, response) -> None:
        self.routes[(method, path)] = response

    def _login(self, request: httpx.Request) -> httpx.Response:
        self.logins += 1
        return httpx.Response(200, json={"accessToken": f"tok-{self.logins}", "expiresIn": 3600})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        response = self.routes.get(key)
        if response is None and key == ("POST", LOGIN_PATH):
            return self._login(request)
        if response is None:
            return httpx.Response(404, json={"message": f"No route for {key[0]} {key[1]}"})
        if callable(response):
            return response(request)
        status, body = response
        return httpx.Response(status, json=body)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def last_json(self, path: str) -> dict:
        return json.loads(self.calls_to(path)[-1].content)


def make_settings(**env) -> Settings:
    """Settings built from explicit values; keys use the environment names."""
    values = {
        "INFISICAL_UNIVERSAL_AUTH_CLIENT_ID": "client-id",
        "INFISICAL_UNIVERSAL_AUTH_CLIENT_SECRET": "client-secret",
        "INFISICAL_HOST_URL": HOST,
    }
    values.update(env)
    return Settings(**values)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_api():
    return FakeInfisical()


@pytest.fixture
def transport(fake_api):
    return httpx.MockTransport(fake_api)


@pytest.fixture
def provider(transport, clock):
    return CredentialProvider("client-id", "client-secret", HOST, transport=transport, clock=clock)


@pytest.fixture
def client(transport, provider):
    return InfisicalClient(HOST, transport=transport, on_unauthorized=provider.invalidate)


@pytest.fixture
def dispatcher(provider, client):
    return McpDispatcher(provider, client, call_timeout=5.0)


@pytest.fixture
def settings():
    return make_settings()
