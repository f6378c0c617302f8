"""healthprobe main application."""

import uuid
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from healthprobe import __version__
from healthprobe.api.router import api_router
from healthprobe.config import Settings, get_settings
from healthprobe.core.clock import Clock, SystemClock
from healthprobe.core.exceptions import HealthProbeError
from healthprobe.services.database import ManagedDatabase, MongoDatabase
from healthprobe.services.health import HealthProbe
from healthprobe.utils.logging import (
    get_logger,
    request_context,
    setup_logging,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    database: ManagedDatabase = app.state.database

    setup_logging(settings.log_level, json_logs=settings.json_logs)
    logger.info("Starting healthprobe", env=settings.env, version=__version__)

    # The service still starts without a database; /health reports it DEGRADED
    try:
        await database.connect()
    except HealthProbeError as e:
        logger.error("Database connection failed at startup", error=e.message, details=e.details)

    logger.info("healthprobe started successfully")

    yield

    logger.info("Shutting down healthprobe...")
    await database.close()
    logger.info("healthprobe shutdown complete")


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind request details to the log context for the duration of a request."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    with request_context(
        request_id,
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else None,
    ):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def healthprobe_error_handler(request: Request, exc: HealthProbeError) -> JSONResponse:
    """Turn an unhandled application error into a generic 500."""
    logger.error(
        "Unhandled application error",
        error=exc.message,
        path=request.url.path,
        details=exc.details,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error": type(exc).__name__},
    )


def create_app(
    settings: Settings | None = None,
    database: ManagedDatabase | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Application settings, defaults to the cached environment settings
        database: Database connection, defaults to a MongoDatabase built from settings
        clock: Time source, defaults to a SystemClock started now
    """
    settings = settings or get_settings()
    database = database or MongoDatabase(settings)
    clock = clock or SystemClock()

    app = FastAPI(
        title="healthprobe API",
        description="Service health, readiness and liveness endpoints",
        version=__version__,
        docs_url="/api/docs" if settings.env != "production" else None,
        redoc_url="/api/redoc" if settings.env != "production" else None,
        openapi_url="/api/openapi.json" if settings.env != "production" else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.clock = clock
    app.state.health_probe = HealthProbe(database=database, clock=clock, settings=settings)

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_context_middleware)
    app.add_exception_handler(HealthProbeError, healthprobe_error_handler)

    app.include_router(api_router)

    return app


def main() -> None:
    """Main entry point for running the application."""
    settings = get_settings()

    uvicorn.run(
        "healthprobe.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
