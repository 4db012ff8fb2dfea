"""
Pytest configuration for studio_admin tests.

Why: Force AnyIO to use the asyncio backend and keep every test off the real
network and the developer's real credential file. HTTP is answered by
`httpx.MockTransport` handlers supplied per test.
"""
from __future__ import annotations

from typing import Callable, List, Optional

import httpx
import pytest

from studio_admin.gateway.config import GatewayConfig
from studio_admin.gateway.request import RequestGateway
from studio_admin.gateway.session import InMemoryCredentialStore

BASE_URL = "http://studio.test"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _clear_studio_env(monkeypatch: pytest.MonkeyPatch):
    """Drop STUDIO_* overrides a developer shell may carry into the suite."""
    for var in (
        "STUDIO_API_BASE_URL",
        "STUDIO_API_TIMEOUT_SECONDS",
        "STUDIO_CREDENTIALS_PATH",
        "STUDIO_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("STUDIO_ENABLE_DOTENV", "false")
    yield


class Recorder:
    """MockTransport handler that records requests and replays canned responses.

    `responder(request)` returns an httpx.Response or raises (e.g. ConnectError).
    """

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> Callable[..., Recorder]:
    def _make(responder: Callable[[httpx.Request], httpx.Response] | None = None) -> Recorder:
        return Recorder(responder or (lambda req: httpx.Response(200, json={})))

    return _make


@pytest.fixture
def make_gateway() -> Callable[..., RequestGateway]:
    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        *,
        admin_token: Optional[str] = None,
        client_token: Optional[str] = None,
        store=None,
    ) -> RequestGateway:
        return RequestGateway(
            store=store or InMemoryCredentialStore(admin_token=admin_token, client_token=client_token),
            config=GatewayConfig(base_url=BASE_URL),
            transport=httpx.MockTransport(handler),
        )

    return _make
