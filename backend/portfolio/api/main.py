"""
Portfolio API Entry Point

Builds the FastAPI application: CORS, request logging, error envelope,
routers, and the startup/shutdown hooks.

Request Path:
=============
    request
       │
       ▼
    CORS ─▶ request logging (request_id bound to every log line)
       │
       ▼
    router ─▶ dependencies (db session, admin gate, services)
       │
       ▼
    PostgreSQL │ Cloudinary │ Redis

Startup checks the database and configures the Cloudinary SDK; shutdown
disposes the engine.

Usage:
======
    uvicorn portfolio.api.main:app --reload
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from portfolio.api.middleware import setup_exception_handlers
from portfolio.api.routes import register_routes
from portfolio.config.settings import settings
from portfolio.shared.adapters.cloudinary_adapter import get_cloudinary_adapter
from portfolio.shared.core.logging import clear_log_context, log_context, logger
from portfolio.shared.db import close_db, init_db

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("API starting", version=settings.APP_VERSION, environment=settings.APP_ENV)
    await init_db()
    get_cloudinary_adapter().configure()

    yield

    await close_db()
    logger.info("API stopped")


async def log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind a request id to the log context and log one line per request."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    clear_log_context()
    log_context(request_id=request_id, method=request.method, path=request.url.path)

    started = time.perf_counter()
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "Request handled",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Photography portfolio backend",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Added last runs first: CORS wraps request logging.
    app.middleware("http")(log_requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    register_routes(app)
    return app


app = create_application()
