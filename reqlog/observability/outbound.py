from __future__ import annotations

from time import perf_counter
from typing import Any, Awaitable, Callable, TypeVar

from reqlog.observability.context import get_logger


T = TypeVar("T")


def _status_of(resp: Any) -> int | None:
    status = getattr(resp, "status_code", None)
    if isinstance(status, int):
        return status
    return None


async def instrument_outbound_call(*, operation: str, target: str, fn: Callable[[], Awaitable[T]]) -> T:
    """Time an outbound call and emit a structured log event on the ambient logger."""

    start = perf_counter()
    try:
        resp = await fn()
    except Exception:
        elapsed_ms = (perf_counter() - start) * 1000.0
        get_logger().exception(
            "outbound_call_failed",
            operation=operation,
            target=target,
            elapsed_ms=round(elapsed_ms, 2),
        )
        raise

    elapsed_ms = (perf_counter() - start) * 1000.0
    get_logger().info(
        "outbound_call",
        operation=operation,
        target=target,
        elapsed_ms=round(elapsed_ms, 2),
        status_code=_status_of(resp),
    )
    return resp
