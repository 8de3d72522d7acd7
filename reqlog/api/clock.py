from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from datetime import datetime

from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse

from reqlog.config import get_settings
from reqlog.observability.context import get_logger
from reqlog.observability.loggers import derive_logger

router = APIRouter(tags=["clock"])


@router.get("/sse")
async def clock_stream(request: Request, limit: int | None = Query(default=None, ge=1)) -> StreamingResponse:
    settings = get_settings()
    interval = settings.sse_interval_seconds
    origin = request.headers.get("origin") or "*"

    async def ticks() -> AsyncIterator[str]:
        # A generator may be finalized outside the request context, so hold a
        # derived logger instead of installing a frame across yields.
        logger = derive_logger(get_logger(), {"stream": "clock"})
        sent = 0
        logger.info("sse client connected")
        try:
            while limit is None or sent < limit:
                # Like a timer: the first tick arrives after one interval.
                await asyncio.sleep(interval)
                yield f"data: {datetime.now().strftime('%H:%M:%S')}\n\n"
                sent += 1
        finally:
            logger.info("sse stream closed", events_sent=sent)

    return StreamingResponse(
        ticks(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            # Disable proxy buffering (e.g. nginx) so ticks arrive immediately.
            "X-Accel-Buffering": "no",
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        },
    )
