from __future__ import annotations

import random
from typing import Any

from fastapi import APIRouter, HTTPException

from reqlog.errors import UpstreamError
from reqlog.observability.context import bind, get_logger
from reqlog.services.user_service import fetch_user

router = APIRouter(tags=["users"])


async def _fetch_user_in_context(user_id: int) -> dict[str, Any]:
    get_logger().info("fetching user data")
    try:
        return await fetch_user(user_id)
    except UpstreamError as exc:
        get_logger().error("user fetch failed", upstream_status=exc.status_code, reason=exc.reason)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/fetch-user")
async def fetch_random_user() -> dict[str, Any]:
    user_id = random.randint(1, 10)
    # Everything logged while fetching carries user.id on top of request.id.
    return await bind({"user.id": user_id}, _fetch_user_in_context, user_id)
