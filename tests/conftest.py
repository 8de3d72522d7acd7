from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from reqlog.config import get_settings
from reqlog.main import app
from reqlog.services.user_service import set_user_client

USER_API_BASE_URL = "http://users.test"


class MockUserApi:
    """Stands in for the demo-data API; paths listed in ``failures`` answer with that status."""

    def __init__(self) -> None:
        self.failures: dict[str, int] = {}
        self.delay: float = 0.0
        self.calls: list[str] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        if self.delay:
            await asyncio.sleep(self.delay)

        if path in self.failures:
            return httpx.Response(self.failures[path], json={})

        user_id = int(path.rsplit("/", 1)[-1])
        return httpx.Response(200, json={"id": user_id, "name": f"User {user_id}"})


@pytest.fixture
def user_api() -> MockUserApi:
    return MockUserApi()


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, user_api: MockUserApi) -> None:
    monkeypatch.setenv("USER_API_BASE_URL", USER_API_BASE_URL)
    monkeypatch.setenv("SSE_INTERVAL_SECONDS", "0.01")
    monkeypatch.delenv("REQUEST_ID_HEADER", raising=False)
    get_settings.cache_clear()

    set_user_client(httpx.AsyncClient(transport=httpx.MockTransport(user_api), base_url=USER_API_BASE_URL))

    yield

    set_user_client(None)
    get_settings.cache_clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
