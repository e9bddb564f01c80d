"""FastAPI application entry point.

Configures the application with logging, CORS, metrics, exception
handling and health checks.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docqa import __version__
from docqa.api.cors import CORSHeadersMiddleware
from docqa.api.routes import router
from docqa.config import Settings, get_settings
from docqa.exceptions import DocQAError, ErrorCode
from docqa.logging_config import get_logger, setup_logging
from docqa.observability.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
)
from docqa.rag.service import ChatService, build_chat_service

logger = get_logger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger.info(
        "Starting docqa",
        extra={
            "version": __version__,
            "environment": settings.environment.value,
            "backend": settings.vector_store.backend.value,
        },
    )

    yield

    logger.info("Shutting down docqa")
    await app.state.chat_service.close()


def create_app(
    settings: Settings | None = None,
    chat_service: ChatService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (default: read from environment).
        chat_service: Pre-built chat service (default: wired from settings).

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="docqa",
        description="Question answering over a document corpus",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.chat_service = chat_service or build_chat_service(settings)

    # Last added runs first: CORS wraps everything, including metrics.
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    app.add_exception_handler(DocQAError, docqa_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(router)
    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/ready", readiness_check, methods=["GET"], tags=["Health"])
    app.add_api_route("/health/live", liveness_check, methods=["GET"], tags=["Health"])
    app.add_api_route(
        "/metrics",
        metrics_endpoint,
        methods=["GET"],
        tags=["Observability"],
        include_in_schema=False,
    )

    return app


async def docqa_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle DocQAError exceptions.

    Only the public message is returned; details go to the log.
    """
    if not isinstance(exc, DocQAError):
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    status_code = _get_status_code(exc.code)
    log = logger.warning if status_code < 500 else logger.error
    log(
        f"Request failed: {exc.message}",
        extra={
            "error_code": exc.code.value,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Report malformed request bodies as 400."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    logger.warning(
        INVALID_BODY_MESSAGE,
        extra={"path": request.url.path, "errors": errors},
    )
    return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})


async def http_exception_handler(
    _request: Request,
    exc: Exception,
) -> JSONResponse:
    """Render framework HTTP errors (404, 405) in the API's error shape."""
    if not isinstance(exc, StarletteHTTPException):
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=exc.headers,
    )


def _get_status_code(error_code: ErrorCode) -> int:
    """Map error code to HTTP status code."""
    if error_code == ErrorCode.VALIDATION_ERROR:
        return 400

    # Configuration, store and upstream failures are all server-side
    return 500


async def health_check() -> dict[str, Any]:
    """Basic health check endpoint.

    Returns:
        Health status with version and timestamp.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def readiness_check(request: Request) -> dict[str, Any]:
    """Readiness probe.

    Ready once an API key is configured and the vector store is reachable.

    Returns:
        Readiness status with component checks.
    """
    service: ChatService = request.app.state.chat_service
    checks = await service.readiness()
    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }


async def liveness_check() -> dict[str, str]:
    """Liveness probe.

    Returns:
        Liveness status.
    """
    return {"status": "alive"}


async def metrics_endpoint() -> Response:
    """Prometheus scrape endpoint."""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


# Create the application instance
app = create_app()
