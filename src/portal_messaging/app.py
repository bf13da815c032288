from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portal_messaging.api.middleware.correlation_id import CorrelationIdMiddleware
from portal_messaging.api.middleware.metrics import RequestTimingMiddleware
from portal_messaging.api.v1.routers import health, messaging
from portal_messaging.application.exceptions import (
    BackendError,
    NotFoundError,
    ValidationError,
)
from portal_messaging.config import settings
from portal_messaging.infrastructure.http.backend import build_http_backend
from portal_messaging.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


def create_app(sessions: SessionRegistry | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Startup / shutdown lifecycle."""
        logger.info(
            "Messaging API started (portal=%s, poll=%.1fs)",
            settings.PORTAL_API_URL,
            settings.MESSAGE_POLL_INTERVAL,
        )
        yield
        await app.state.sessions.close_all()
        logger.info("Messaging API stopped")

    app = FastAPI(
        title="Portal Messaging Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    if sessions is None:
        sessions = SessionRegistry(
            build_http_backend,
            poll_interval=settings.MESSAGE_POLL_INTERVAL,
        )
    app.state.sessions = sessions

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messaging.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(BackendError)
    async def _backend(_req: Request, exc: BackendError) -> JSONResponse:
        logger.warning("Portal backend error: %s", exc.detail)
        return JSONResponse(status_code=502, content={"detail": exc.detail})
