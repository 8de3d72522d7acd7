from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from reqlog.api.clock import router as clock_router
from reqlog.api.users import router as users_router
from reqlog.config import get_settings
from reqlog.observability.logging import configure_logging
from reqlog.observability.middleware import RequestContextMiddleware
from reqlog.services.user_service import close_user_client


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(level=settings.log_level.upper(), json=settings.log_json)
    yield
    await close_user_client()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(title="reqlog", version="0.1.0", lifespan=_lifespan)
    app.add_middleware(RequestContextMiddleware)
    app.include_router(users_router)
    app.include_router(clock_router)

    @app.api_route("/health", methods=["GET", "HEAD"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    # Mounted last so it never shadows the API routes.
    app.mount("/", StaticFiles(directory=str(settings.static_path), html=True, check_dir=False), name="static")
    return app


app = create_app()
