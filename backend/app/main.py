from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.router import api_router
from app.clients import close_clients
from app.config import settings
from app.logging_config import setup_logging
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import limiter

setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: close pooled collaborator clients on shutdown.

    Args:
        application: The FastAPI application instance (unused directly but
            required by the lifespan protocol).
    """
    yield
    await close_clients()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        A fully configured FastAPI instance with middleware and routers applied.
    """
    application = FastAPI(
        title="Docs Vector Search",
        description="Streamed answers to documentation questions",
        version="0.1.0",
        lifespan=lifespan,
    )

    Instrumentator().instrument(application).expose(application, endpoint="/metrics")

    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Middleware (order matters — last added is first executed)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    # Routers
    application.include_router(api_router)

    return application


app = create_app()
