from __future__ import annotations

from typing import Any

import httpx

from reqlog.config import get_settings
from reqlog.errors import UpstreamError
from reqlog.observability.context import get_logger
from reqlog.observability.outbound import instrument_outbound_call

_client: Any | None = None


def set_user_client(client: Any | None) -> None:
    global _client
    _client = client


def get_user_client() -> Any:
    global _client
    if _client is None:
        settings = get_settings()
        _client = httpx.AsyncClient(
            base_url=settings.user_api_base_url,
            timeout=settings.user_api_timeout_seconds,
        )
    return _client


async def close_user_client() -> None:
    global _client
    if isinstance(_client, httpx.AsyncClient):
        await _client.aclose()
    _client = None


async def fetch_user(user_id: int) -> dict[str, Any]:
    client = get_user_client()
    path = f"/users/{user_id}"
    response = await instrument_outbound_call(
        operation="users.get",
        target=path,
        fn=lambda: client.get(path),
    )

    if not response.is_success:
        raise UpstreamError(status_code=response.status_code, reason=response.reason_phrase)

    user = response.json()
    get_logger().info(f"profile info for user {user_id} retrieved successfully")
    return user
