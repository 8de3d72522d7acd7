from __future__ import annotations

import re
import uuid
from time import perf_counter
from typing import Any, Callable

from starlette.datastructures import Headers, MutableHeaders

from reqlog.config import get_settings
from reqlog.observability.context import bind
from reqlog.observability.loggers import derive_logger, get_base_logger


_VISIBLE_ASCII = re.compile(r"[\x21-\x7e]+")


def severity_for_status(status_code: int) -> str:
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warning"
    return "info"


_COMPLETION_EVENTS = {
    "error": "server error",
    "warning": "client error",
    "info": "request completed",
}


def resolve_request_id(raw: str | None, max_length: int = 128) -> str:
    """Return the incoming correlation id, or a fresh UUID if it is unusable.

    Accepted values are 1..max_length visible ASCII characters after trimming.
    """

    candidate = (raw or "").strip()
    if candidate and len(candidate) <= max_length and _VISIBLE_ASCII.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class _CompletionHook:
    """Emits the completion record for one request, at most once."""

    def __init__(self, logger: Any, start: float) -> None:
        self._logger = logger
        self._start = start
        self.fired = False

    def fire(self, status_code: int) -> None:
        if self.fired:
            return
        self.fired = True

        duration_ms = (perf_counter() - self._start) * 1000.0
        severity = severity_for_status(status_code)
        getattr(self._logger, severity)(
            _COMPLETION_EVENTS[severity],
            duration_ms=round(duration_ms, 3),
            status_code=status_code,
        )


class RequestContextMiddleware:
    """Binds a request-scoped log context and logs request entry and completion."""

    def __init__(self, app: Callable[..., Any], header_name: str | None = None) -> None:
        self.app = app
        self._header_name = header_name

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        settings = get_settings()
        header_name = (self._header_name or settings.request_id_header).lower()

        headers = Headers(scope=scope)
        request_id = resolve_request_id(headers.get(header_name), max_length=settings.request_id_max_length)
        start = perf_counter()

        method = scope.get("method")
        path = scope.get("path")
        client = scope.get("client")

        request_logger = derive_logger(get_base_logger(), {"request.id": request_id})
        request_logger.info(
            f"incoming {method} request to {path}",
            **{
                "http.request.method": method,
                "url.path": path,
                "client.address": client[0] if client else None,
                "user_agent.original": headers.get("user-agent"),
            },
        )

        completion = _CompletionHook(request_logger, start)
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                response_headers = MutableHeaders(scope=message)
                response_headers[header_name] = request_id

            await send(message)

            if message.get("type") == "http.response.body" and not message.get("more_body", False):
                completion.fire(status_code)

        try:
            await bind({"request.id": request_id}, self.app, scope, receive, send_wrapper)
        finally:
            # Downstream raised, the client went away, or no body was ever finished.
            completion.fire(status_code)
